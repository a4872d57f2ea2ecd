"""Synthesize output trees from templates and per-render selectors."""

import logging
from typing import Any, Dict, Optional

from pystencil.core.markers import Present, Removed, Special, Unset, lookup, overlay
from pystencil.core.template import TemplateElement, TemplateFragment, TemplateNode
from pystencil.runtime.resolver import apply_selectors
from pystencil.runtime.selectors import Changes, SelectorIndex, Selectors, index_selectors
from pystencil.runtime.vdom import Component, Renderer, default_renderer

log = logging.getLogger(__name__)


class TemplateComponent:
    """Render function closing over a template.

    Calling it with a selectors mapping synthesizes a fresh output tree.
    """

    def __init__(self, template: TemplateNode, renderer: Optional[Renderer] = None):
        self.template = template
        self.renderer = renderer or default_renderer

    def __call__(self, selectors: Optional[Selectors] = None) -> Any:
        return element_from_template(self.template, selectors, renderer=self.renderer)

    def __repr__(self) -> str:
        return f"TemplateComponent({self.template!r})"


def wrapped(component: Component) -> Changes:
    """Changes that hand an element's subtree to ``component``.

    The component receives one prop, ``template``: a TemplateComponent for the
    wrapped element. Only the wrapped subtree re-renders when it does. Passing
    the same ``wrapped`` changes into ``template`` would wrap recursively,
    forever.
    """
    return {Special.WRAP: component}


def _synthesize_children(
    template: TemplateElement,
    new_children: Dict[str, Any],
    index: SelectorIndex,
    renderer: Renderer,
) -> Dict[str, Any]:
    children: Dict[str, Any] = {}
    for name, child in template.children.items():
        outcome = lookup(new_children, name)
        if isinstance(outcome, Unset):
            children[name] = _element_from_template(child, index, renderer)
        elif isinstance(outcome, Present):
            # Caller supplied: used as-is, never re-synthesized
            children[name] = outcome.value
        elif not isinstance(outcome, Removed):
            raise TypeError(f"Unhandled override outcome {outcome!r}")

    extra = {name: value for name, value in new_children.items() if name not in template.children}
    return overlay(children, extra)


def _element_from_template(
    template: TemplateNode, index: SelectorIndex, renderer: Renderer
) -> Any:
    if isinstance(template, TemplateFragment):
        return renderer.create_fragment(
            {
                name: _element_from_template(child, index, renderer)
                for name, child in template.children.items()
            }
        )
    if not isinstance(template, TemplateElement):
        raise TypeError(f"Expected a template node, got {type(template).__name__}")

    new_props, new_children = apply_selectors(template, index, renderer.children_key)

    wrap = lookup(new_props, Special.WRAP)
    if isinstance(wrap, Present):
        log.debug(f"Wrapping {template!r} with {wrap.value!r}")
        element = renderer.create_element(
            wrap.value, {"template": TemplateComponent(template, renderer)}
        )
    else:
        props = overlay(template.props, new_props)
        children = _synthesize_children(template, new_children, index, renderer)
        element = renderer.create_element(template.class_name, props, children)

    if template.single_fragment:
        element = renderer.create_fragment({template.name: element})

    return element


def element_from_template(
    template: TemplateNode,
    selectors: Optional[Selectors] = None,
    renderer: Optional[Renderer] = None,
) -> Any:
    """Create an output tree from a template.

    ``selectors`` maps a name, ``ROOT`` or a predicate to changes; it is
    validated in full before anything is synthesized.
    """
    renderer = renderer or default_renderer
    index = index_selectors(selectors, renderer.children_key)
    return _element_from_template(template, index, renderer)


def component_from_template(
    template: TemplateNode, renderer: Optional[Renderer] = None
) -> TemplateComponent:
    return TemplateComponent(template, renderer)
