"""Resolve indexed selectors against a single template element."""

import logging
from typing import Any, Dict, Mapping, Tuple

from pystencil.core.exceptions import InvalidCallbackResult, InvalidChangesType
from pystencil.core.markers import CHILDREN, Special
from pystencil.core.template import TemplateElement
from pystencil.runtime.selectors import Changes, SelectorIndex, check_children

log = logging.getLogger(__name__)


def _merge(into: Dict[Any, Any], changes: Mapping[Any, Any]) -> None:
    for key, value in changes.items():
        into[key] = value


def apply_selectors(
    template: TemplateElement,
    index: SelectorIndex,
    children_key: Any = CHILDREN,
) -> Tuple[Dict[Any, Any], Dict[str, Any]]:
    """Compute ``(override_props, override_children)`` for ``template``.

    Changes are applied root first, then by name, then each matching
    predicate in registration order; later changes win on colliding keys.
    Values are kept raw here, so a ``NONE`` override survives until overlay.
    """
    if index.is_empty:
        return dict(template.props), {}

    new_props: Dict[Any, Any] = {}
    new_children: Dict[str, Any] = {}

    def apply(changes: Changes) -> None:
        if callable(changes) and not isinstance(changes, Mapping):
            result = changes(template.source)
            if not isinstance(result, Mapping):
                log.warning(f"Changes object related to the following error: {changes!r}")
                raise InvalidCallbackResult(changes, result, template.source)
            changes = result

        if not isinstance(changes, Mapping):
            log.warning(f"Changes object related to the following error: {changes!r}")
            raise InvalidChangesType(changes, hint=False)

        check_children(changes, children_key)
        _merge(new_props, changes)

        if children_key in new_props:
            _merge(new_children, new_props.pop(children_key))

    if index.fast is not None:
        if template.is_root and Special.ROOT in index.fast:
            apply(index.fast[Special.ROOT])
        if template.name in index.fast:
            apply(index.fast[template.name])

    if index.slow is not None:
        for predicate, changes in index.slow:
            if predicate(template.source):
                apply(changes)

    return new_props, new_children
