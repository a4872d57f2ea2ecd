"""Template builder: walks a source tree once into an immutable template."""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Optional, Sequence

from pystencil.compiler.snapshot import properties_from_instance
from pystencil.core.exceptions import InvalidSourceNode
from pystencil.core.source import SourceNode
from pystencil.core.template import TemplateElement, TemplateFragment, TemplateNode
from pystencil.reflection.api_dump import ApiDump, get_api

log = logging.getLogger(__name__)


@dataclass
class _Pending:
    """A source node waiting to be installed into a children map."""

    source: SourceNode
    parent: Dict[str, Optional[TemplateNode]]
    key: str
    single_fragment: bool = False


def fragment_key(name: str, index: int) -> str:
    """Key of the ``index``-th member of a collision fragment."""
    if index == 0:
        return name
    return f"{name} {index}"


def group_by_name(children: Sequence[SourceNode]) -> Dict[str, List[SourceNode]]:
    groups: Dict[str, List[SourceNode]] = {}
    for child in children:
        groups.setdefault(child.name, []).append(child)
    return groups


def template_from_instance(
    instance: SourceNode, api: Optional[ApiDump] = None
) -> TemplateElement:
    """Build the template for ``instance`` and all of its descendants.

    Siblings sharing a name are grouped under a TemplateFragment in that
    name's slot; each member is flagged ``single_fragment`` so synthesis can
    restore its own name.
    """
    if not isinstance(instance, SourceNode):
        log.warning(f"instance object related to the following error: {instance!r}")
        raise InvalidSourceNode(instance)

    api = api if api is not None else get_api()
    top: Dict[str, Optional[TemplateNode]] = {}
    work: List[_Pending] = [_Pending(instance, top, instance.name)]
    built = 0

    while work:
        item = work.pop()
        source = item.source

        props = properties_from_instance(source, api)
        children: Dict[str, Optional[TemplateNode]] = {}

        item.parent[item.key] = TemplateElement(
            class_name=source.class_name,
            name=source.name,
            source=source,
            props=props,
            children=MappingProxyType(children),
            is_root=source is instance,
            single_fragment=item.single_fragment,
        )
        built += 1

        for name, group in group_by_name(source.get_children()).items():
            # Reserve the slot now so children keep their source order.
            children[name] = None
            if len(group) == 1:
                work.append(_Pending(group[0], children, name))
                continue

            members: Dict[str, Optional[TemplateNode]] = {}
            children[name] = TemplateFragment(MappingProxyType(members))
            for index, child in enumerate(group):
                key = fragment_key(name, index)
                members[key] = None
                work.append(_Pending(child, members, key, single_fragment=True))

    root = top[instance.name]
    assert isinstance(root, TemplateElement)
    log.debug(f"Built template for {instance!r} ({built} elements)")
    return root
