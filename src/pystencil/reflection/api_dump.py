"""Class reflection metadata: property descriptors, defaults and hierarchy."""

import json
import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from pystencil.core.exceptions import UnknownSourceType

log = logging.getLogger(__name__)

API_DUMP_ENV = "PYSTENCIL_API_DUMP"

# Security tier that scripts can read/write without elevated capabilities
PUBLIC_SECURITY = "None"


@dataclass(frozen=True)
class PropertyInfo:
    name: str
    default: Any = None
    read_security: str = PUBLIC_SECURITY
    write_security: str = PUBLIC_SECURITY
    tags: Tuple[str, ...] = ()

    @property
    def is_readable(self) -> bool:
        return self.read_security == PUBLIC_SECURITY and "NotScriptable" not in self.tags

    @property
    def is_writable(self) -> bool:
        return (
            self.write_security == PUBLIC_SECURITY
            and "ReadOnly" not in self.tags
            and "NotScriptable" not in self.tags
        )

    @classmethod
    def from_member(cls, member: Dict[str, Any]) -> "PropertyInfo":
        security = member.get("Security", PUBLIC_SECURITY)
        if isinstance(security, dict):
            read = security.get("Read", PUBLIC_SECURITY)
            write = security.get("Write", PUBLIC_SECURITY)
        else:
            read = write = security
        return cls(
            name=member["Name"],
            default=member.get("Default"),
            read_security=read,
            write_security=write,
            tags=tuple(member.get("Tags") or ()),
        )


@dataclass
class ClassInfo:
    name: str
    superclass: Optional[str] = None
    members: Dict[str, PropertyInfo] = field(default_factory=dict)
    tags: Tuple[str, ...] = ()
    _dump: Optional["ApiDump"] = field(default=None, repr=False, compare=False)

    def properties(self) -> Dict[str, PropertyInfo]:
        """All properties of this class, inherited ones included.

        Subclasses shadow superclass members of the same name.
        """
        chain: List[ClassInfo] = []
        current: Optional[ClassInfo] = self
        while current is not None:
            chain.append(current)
            if current.superclass is None or current._dump is None:
                break
            current = current._dump.classes.get(current.superclass)

        merged: Dict[str, PropertyInfo] = {}
        for info in reversed(chain):
            merged.update(info.members)
        return merged

    def property_default(self, name: str) -> Any:
        info = self.properties().get(name)
        return info.default if info is not None else None


class ApiDump:
    """Registry of ClassInfo objects keyed by class name."""

    def __init__(self, classes: Iterable[ClassInfo] = ()) -> None:
        self.classes: Dict[str, ClassInfo] = {}
        for info in classes:
            self.add(info)

    def add(self, info: ClassInfo) -> ClassInfo:
        info._dump = self
        self.classes[info.name] = info
        return info

    def get(self, class_name: str) -> Optional[ClassInfo]:
        return self.classes.get(class_name)

    def require(self, class_name: str, source: Any = None) -> ClassInfo:
        info = self.classes.get(class_name)
        if info is None:
            raise UnknownSourceType(class_name, source)
        return info

    def is_a(self, class_name: str, ancestor: str) -> bool:
        """Return True if ``class_name`` is ``ancestor`` or inherits from it."""
        seen = set()
        current: Optional[str] = class_name
        while current is not None and current not in seen:
            if current == ancestor:
                return True
            seen.add(current)
            info = self.classes.get(current)
            current = info.superclass if info is not None else None
        return False

    def __contains__(self, class_name: str) -> bool:
        return class_name in self.classes

    def __len__(self) -> int:
        return len(self.classes)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ApiDump":
        """Build from the JSON dump layout: ``{"Classes": [{"Name", "Superclass", "Members"}]}``."""
        dump = cls()
        for entry in data.get("Classes", []):
            superclass = entry.get("Superclass")
            if superclass in ("<<<ROOT>>>", ""):
                superclass = None
            members = {}
            for member in entry.get("Members", []):
                if member.get("MemberType", "Property") != "Property":
                    continue
                prop = PropertyInfo.from_member(member)
                members[prop.name] = prop
            dump.add(
                ClassInfo(
                    name=entry["Name"],
                    superclass=superclass,
                    members=members,
                    tags=tuple(entry.get("Tags") or ()),
                )
            )
        return dump

    @classmethod
    def load(cls, path: Union[str, Path]) -> "ApiDump":
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        dump = cls.from_dict(data)
        log.debug(f"Loaded API dump with {len(dump)} classes from {path}")
        return dump

    @classmethod
    def bundled(cls) -> "ApiDump":
        """The dump shipped with the package."""
        content = (
            resources.files("pystencil")
            .joinpath("data").joinpath("api_dump.json")
            .read_text(encoding="utf-8")
        )
        return cls.from_dict(json.loads(content))


@lru_cache(maxsize=None)
def _load_api(path: Optional[str]) -> ApiDump:
    if path:
        return ApiDump.load(path)
    return ApiDump.bundled()


def get_api() -> ApiDump:
    """Get the process-wide API dump.

    Honors the ``PYSTENCIL_API_DUMP`` environment variable, falling back to the
    bundled dump.
    """
    return _load_api(os.environ.get(API_DUMP_ENV) or None)
