import pystencil
from pystencil import CHILDREN, NONE, ROOT, select
from pystencil.runtime.instance import Instance
from pystencil.runtime.vdom import VElement, el


def test_from_instance(panel):
    Panel = pystencil.from_instance(panel)

    output = Panel(
        {
            ROOT: {"Visible": False},
            "Title": lambda instance: {"Text": instance.get_property("Text") + "!"},
            select.class_("Frame"): {"ZIndex": 2},
        }
    )
    assert output.props == {"Visible": False, "ZIndex": 2}
    assert output.children["Title"].props == {"Text": "Default!"}
    for member in output.children["Item"].children.values():
        assert member.children["Item"].props == {"ZIndex": 2}


def test_public_aliases(panel):
    template = pystencil.build_template(panel)
    assert pystencil.synthesize(template) == pystencil.make_component(template)()
    assert pystencil.component_from_instance is pystencil.from_instance


def test_inventory_scenario(api):
    """Fill a scroller with caller-made items and retitle the window."""
    app = Instance(
        "ScreenGui",
        "InventoryApp",
        children=[
            Instance(
                "Frame",
                "OuterFrame",
                children=[
                    Instance("TextLabel", "WindowTitle", {"Text": "Inventory"}, api=api),
                    Instance(
                        "ScrollingFrame",
                        "Scroller",
                        children=[
                            Instance("UIListLayout", "Layout", api=api),
                            Instance("Frame", "Placeholder", api=api),
                        ],
                        api=api,
                    ),
                ],
                api=api,
            )
        ],
        api=api,
    )
    Inventory = pystencil.from_instance(app, api=api)

    items = {f"Item{i}": el("TextButton", {"Text": name}) for i, name in enumerate(["Sword", "Shield"])}
    output = Inventory(
        {
            "WindowTitle": {"Text": "Weapons"},
            "OuterFrame": {"Visible": True},
            "Scroller": {CHILDREN: {"Placeholder": NONE, **items}},
        }
    )

    outer = output.children["OuterFrame"]
    assert outer.children["WindowTitle"].props == {"Text": "Weapons"}
    scroller = outer.children["Scroller"]
    assert list(scroller.children) == ["Layout", "Item0", "Item1"]
    assert scroller.children["Item1"] == VElement("TextButton", {"Text": "Shield"}, {})
