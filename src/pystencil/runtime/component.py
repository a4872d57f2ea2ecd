from typing import Optional

from pystencil.compiler.builder import template_from_instance
from pystencil.core.source import SourceNode
from pystencil.reflection.api_dump import ApiDump
from pystencil.runtime.synthesizer import TemplateComponent, component_from_template
from pystencil.runtime.vdom import Renderer


def component_from_instance(
    instance: SourceNode,
    renderer: Optional[Renderer] = None,
    api: Optional[ApiDump] = None,
) -> TemplateComponent:
    """Create a component whose props are ``{Selector: Changes}``.

    The template is built once, here; every call of the returned component
    synthesizes from that cached template.

    Usage:
        Inventory = from_instance(load_tree("inventory.json"))

        Inventory({
            "WindowTitle": {"Text": category},
            "Scroller": {CHILDREN: make_items(items)},
            select.class_("TextButton"): {"AutoButtonColor": False},
        })
    """
    template = template_from_instance(instance, api=api)
    return component_from_template(template, renderer)


from_instance = component_from_instance
