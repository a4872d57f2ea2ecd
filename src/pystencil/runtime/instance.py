"""In-memory source tree used by the CLI, the tests and embedding apps."""

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Set, Union

from pystencil.reflection.api_dump import ApiDump, get_api

_MISSING = object()


class Instance:
    """A node of a statically authored tree.

    Properties that were never set read back as the class default from the
    API dump, the same way a freshly created object would report them.
    """

    def __init__(
        self,
        class_name: str,
        name: Optional[str] = None,
        properties: Optional[Dict[str, Any]] = None,
        attributes: Optional[Dict[str, Any]] = None,
        tags: Optional[Iterable[str]] = None,
        children: Optional[Iterable["Instance"]] = None,
        api: Optional[ApiDump] = None,
    ) -> None:
        self.class_name = class_name
        self.name = name if name is not None else class_name
        self.properties: Dict[str, Any] = dict(properties or {})
        self.attributes: Dict[str, Any] = dict(attributes or {})
        self.tags: Set[str] = set(tags or ())
        self.parent: Optional["Instance"] = None
        self._children: List["Instance"] = []
        self._api = api
        for child in children or ():
            self.add_child(child)

    def add_child(self, child: "Instance") -> "Instance":
        if child.parent is not None:
            child.parent._children.remove(child)
        child.parent = self
        self._children.append(child)
        return child

    def get_children(self) -> List["Instance"]:
        return list(self._children)

    def find_first_child(self, name: str, recursive: bool = False) -> Optional["Instance"]:
        for child in self._children:
            if child.name == name:
                return child
        if recursive:
            for child in self._children:
                found = child.find_first_child(name, recursive=True)
                if found is not None:
                    return found
        return None

    def get_property(self, name: str) -> Any:
        if name == "Name":
            return self.name
        if name == "ClassName":
            return self.class_name
        if name == "Parent":
            return self.parent

        value = self.properties.get(name, _MISSING)
        if value is not _MISSING:
            return value

        api = self._api if self._api is not None else get_api()
        info = api.get(self.class_name)
        if info is not None:
            prop = info.properties().get(name)
            if prop is not None:
                return prop.default
        raise AttributeError(f"{name} is not a valid member of {self.class_name} '{self.name}'")

    def set_property(self, name: str, value: Any) -> None:
        if name == "Name":
            self.name = value
        else:
            self.properties[name] = value

    def get_attribute(self, name: str) -> Any:
        return self.attributes.get(name)

    def set_attribute(self, name: str, value: Any) -> None:
        if value is None:
            self.attributes.pop(name, None)
        else:
            self.attributes[name] = value

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    def add_tag(self, tag: str) -> None:
        self.tags.add(tag)

    def get_full_name(self) -> str:
        parts = []
        node: Optional[Instance] = self
        while node is not None:
            parts.append(node.name)
            node = node.parent
        return ".".join(reversed(parts))

    def __repr__(self) -> str:
        return f"<{self.class_name} {self.get_full_name()!r}>"

    @classmethod
    def from_dict(cls, data: Dict[str, Any], api: Optional[ApiDump] = None) -> "Instance":
        """Build a tree from ``{"ClassName", "Name", "Properties", "Attributes", "Tags", "Children"}``."""
        if "ClassName" not in data:
            raise ValueError(f"Missing 'ClassName' in instance description: {data!r}")
        root = cls(
            data["ClassName"],
            name=data.get("Name"),
            properties=data.get("Properties"),
            attributes=data.get("Attributes"),
            tags=data.get("Tags"),
            api=api,
        )
        # Iterative so that very deep descriptions load without recursion
        stack = [(root, data.get("Children") or [])]
        while stack:
            parent, children = stack.pop()
            for child_data in children:
                if "ClassName" not in child_data:
                    raise ValueError(
                        f"Missing 'ClassName' in instance description: {child_data!r}"
                    )
                child = parent.add_child(
                    cls(
                        child_data["ClassName"],
                        name=child_data.get("Name"),
                        properties=child_data.get("Properties"),
                        attributes=child_data.get("Attributes"),
                        tags=child_data.get("Tags"),
                        api=api,
                    )
                )
                stack.append((child, child_data.get("Children") or []))
        return root


def load_tree(path: Union[str, Path], api: Optional[ApiDump] = None) -> Instance:
    """Load a source tree from a JSON file."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return Instance.from_dict(data, api=api)
