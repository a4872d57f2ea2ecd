import pytest

from pystencil import select
from pystencil.compiler.builder import template_from_instance
from pystencil.core.exceptions import InvalidCallbackResult, InvalidChangesType
from pystencil.core.markers import CHILDREN, NONE, ROOT
from pystencil.runtime.resolver import apply_selectors
from pystencil.runtime.selectors import index_selectors


@pytest.fixture
def template(panel, api):
    return template_from_instance(panel, api)


def test_no_selectors_returns_snapshot_copy(template):
    title = template.children["Title"]
    props, children = apply_selectors(title, index_selectors(None))
    assert props == {"Text": "Default"}
    assert children == {}
    props["Text"] = "mutated"
    assert title.props["Text"] == "Default"


def test_unmatched_node_gets_empty_overrides(template):
    title = template.children["Title"]
    props, children = apply_selectors(title, index_selectors({"Other": {"Text": "x"}}))
    assert props == {}
    assert children == {}


def test_name_match(template):
    title = template.children["Title"]
    props, _ = apply_selectors(title, index_selectors({"Title": {"Text": "Hi"}}))
    assert props == {"Text": "Hi"}


def test_root_applies_only_to_root(template):
    index = index_selectors({ROOT: {"Visible": False}})
    root_props, _ = apply_selectors(template, index)
    title_props, _ = apply_selectors(template.children["Title"], index)
    assert root_props == {"Visible": False}
    assert title_props == {}


def test_application_order(template):
    """Root, then name, then predicates; later changes win."""
    index = index_selectors(
        {
            select.name("Panel"): {"ZIndex": 3},
            "Panel": {"ZIndex": 2, "Visible": True},
            ROOT: {"ZIndex": 1, "Visible": False, "LayoutOrder": 5},
        }
    )
    props, _ = apply_selectors(template, index)
    assert props == {"ZIndex": 3, "Visible": True, "LayoutOrder": 5}


def test_later_predicate_wins(template):
    title = template.children["Title"]
    index = index_selectors(
        {
            select.class_("TextLabel"): {"Text": "first", "TextSize": 10},
            select.is_a("GuiObject"): {"Text": "second"},
        }
    )
    props, _ = apply_selectors(title, index)
    assert props == {"Text": "second", "TextSize": 10}


def test_callback_receives_source(template, panel):
    seen = []

    def changes(instance):
        seen.append(instance)
        return {"Text": instance.get_property("Text").upper()}

    title = template.children["Title"]
    props, _ = apply_selectors(title, index_selectors({"Title": changes}))
    assert props == {"Text": "DEFAULT"}
    assert seen == [panel.find_first_child("Title")]


def test_callback_must_return_mapping(template):
    def bad_changes(instance):
        return ["Text", "Hi"]

    title = template.children["Title"]
    with pytest.raises(InvalidCallbackResult) as exc_info:
        apply_selectors(title, index_selectors({"Title": bad_changes}))
    error = exc_info.value
    assert error.result == ["Text", "Hi"]
    assert error.source is title.source
    assert "bad_changes" in error.location
    assert "test_resolver.py" in error.location
    assert "bad_changes" in str(error)


def test_children_are_split_out(template):
    label = object()
    index = index_selectors({"Panel": {"Visible": False, CHILDREN: {"Title": NONE, "Extra": label}}})
    props, children = apply_selectors(template, index)
    assert props == {"Visible": False}
    assert children == {"Title": NONE, "Extra": label}


def test_children_merge_last_wins(template):
    index = index_selectors(
        {
            ROOT: {CHILDREN: {"A": 1, "B": 2}},
            "Panel": {CHILDREN: {"B": 3}},
        }
    )
    _, children = apply_selectors(template, index)
    assert children == {"A": 1, "B": 3}


def test_children_key_follows_renderer(template):
    index = index_selectors({"Panel": {"children": {"Title": NONE}}})
    props, children = apply_selectors(template, index, children_key="children")
    assert props == {}
    assert children == {"Title": NONE}


def test_children_must_be_mapping(template):
    index = index_selectors({"Panel": lambda instance: {CHILDREN: ["Title"]}})
    with pytest.raises(InvalidChangesType):
        apply_selectors(template, index)


def test_deletion_marker_kept_raw(template):
    props, _ = apply_selectors(template, index_selectors({"Panel": {"Visible": NONE}}))
    assert props == {"Visible": NONE}
