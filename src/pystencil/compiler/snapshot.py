"""Property snapshots of source nodes."""

import logging
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from pystencil.core.source import SourceNode
from pystencil.reflection.api_dump import ApiDump, PropertyInfo, get_api

log = logging.getLogger(__name__)

# Identity, parentage and type are structural; they never become props.
# Transparency is a legacy alias of BackgroundTransparency.
DISALLOWED_PROPS = frozenset({"Parent", "Transparency", "Name", "ClassName"})

EXCLUDED_TAGS = frozenset({"NotScriptable", "ReadOnly"})


def is_snapshot_property(info: PropertyInfo) -> bool:
    """Whether a property is read into template snapshots."""
    if info.name in DISALLOWED_PROPS:
        return False
    if EXCLUDED_TAGS.intersection(info.tags):
        return False
    return info.is_readable and info.is_writable


def properties_from_instance(
    instance: SourceNode, api: Optional[ApiDump] = None
) -> Mapping[str, Any]:
    """Return the props needed to recreate ``instance``, minus its children.

    Only accessible properties whose value differs from the class default are
    included. A property that fails to read is left out.
    """
    api = api if api is not None else get_api()
    class_info = api.require(instance.class_name, instance)

    properties: Dict[str, Any] = {}
    for name, info in class_info.properties().items():
        if not is_snapshot_property(info):
            continue
        try:
            value = instance.get_property(name)
            changed = bool(value != info.default)
        except Exception as e:
            log.debug(f"Skipping {name} on {instance!r}: {e}")
            continue
        if changed:
            properties[name] = value

    return MappingProxyType(properties)
