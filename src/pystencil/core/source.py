from typing import Any, Protocol, Sequence, runtime_checkable


@runtime_checkable
class SourceNode(Protocol):
    """A node of the statically authored tree a template is built from.

    The engine only ever reads through this interface; it never mutates a
    source node.
    """

    name: str
    class_name: str

    def get_children(self) -> Sequence["SourceNode"]: ...

    def get_property(self, name: str) -> Any: ...

    def get_attribute(self, name: str) -> Any: ...

    def has_tag(self, tag: str) -> bool: ...
