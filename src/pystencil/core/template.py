"""Immutable template tree built once per source root."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Union


def _empty() -> Mapping[str, Any]:
    return MappingProxyType({})


@dataclass(frozen=True)
class TemplateFragment:
    """Groups same-named siblings under one logical slot."""

    children: Mapping[str, "TemplateNode"] = field(default_factory=_empty)


@dataclass(frozen=True)
class TemplateElement:
    class_name: str
    name: str
    source: Any = field(compare=False, repr=False)
    props: Mapping[str, Any] = field(default_factory=_empty)
    children: Mapping[str, "TemplateNode"] = field(default_factory=_empty)
    is_root: bool = False
    single_fragment: bool = False

    def __repr__(self) -> str:
        flags = []
        if self.is_root:
            flags.append("root")
        if self.single_fragment:
            flags.append("single_fragment")
        suffix = f" [{', '.join(flags)}]" if flags else ""
        return f"TemplateElement({self.class_name} {self.name!r}{suffix})"


TemplateNode = Union[TemplateElement, TemplateFragment]
