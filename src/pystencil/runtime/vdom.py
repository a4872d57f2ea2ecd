"""Output tree shapes handed to the rendering library."""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional, Protocol, Union, runtime_checkable

from pystencil.core.markers import CHILDREN

Component = Union[str, Callable[..., Any]]


@runtime_checkable
class Renderer(Protocol):
    """What the synthesizer needs from a declarative rendering library."""

    children_key: Any

    def create_element(
        self,
        component: Component,
        props: Optional[Mapping[Any, Any]] = None,
        children: Optional[Mapping[str, Any]] = None,
    ) -> Any: ...

    def create_fragment(self, children: Mapping[str, Any]) -> Any: ...


@dataclass(frozen=True)
class VElement:
    component: Component
    props: Dict[Any, Any] = field(default_factory=dict)
    children: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_host(self) -> bool:
        """True for class-name elements, False for component invocations."""
        return isinstance(self.component, str)

    def __repr__(self) -> str:
        name = self.component if self.is_host else getattr(
            self.component, "__name__", repr(self.component)
        )
        return f"VElement({name}, props={self.props!r}, children={list(self.children)!r})"


@dataclass(frozen=True)
class VFragment:
    children: Dict[str, Any] = field(default_factory=dict)


VNode = Union[VElement, VFragment]


class VDomRenderer:
    """Bundled renderer producing plain VElement/VFragment values."""

    children_key = CHILDREN

    def create_element(
        self,
        component: Component,
        props: Optional[Mapping[Any, Any]] = None,
        children: Optional[Mapping[str, Any]] = None,
    ) -> VElement:
        return VElement(component, dict(props or {}), dict(children or {}))

    def create_fragment(self, children: Mapping[str, Any]) -> VFragment:
        return VFragment(dict(children))


default_renderer = VDomRenderer()


def el(
    component: Component,
    props: Optional[Mapping[Any, Any]] = None,
    children: Optional[Mapping[str, Any]] = None,
) -> VElement:
    """Shorthand for building elements in caller code, e.g. override children."""
    return default_renderer.create_element(component, props, children)


def fragment(children: Optional[Mapping[str, Any]] = None) -> VFragment:
    return default_renderer.create_fragment(children or {})
