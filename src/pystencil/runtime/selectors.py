"""Per-render indexing of caller selectors."""

import logging
from dataclasses import dataclass
from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Tuple,
    Union,
)

from pystencil.core.exceptions import (
    InvalidChangesType,
    InvalidSelectorsMap,
    InvalidSelectorType,
)
from pystencil.core.markers import CHILDREN, Special
from pystencil.core.source import SourceNode

log = logging.getLogger(__name__)

ChangesCallback = Callable[[SourceNode], Mapping[Any, Any]]
Changes = Union[Mapping[Any, Any], ChangesCallback]
Predicate = Callable[[SourceNode], bool]
Selector = Union[str, Special, Predicate]
Selectors = Union[Mapping[Selector, Changes], Iterable[Tuple[Selector, Changes]]]


@dataclass(frozen=True)
class SelectorIndex:
    """Selectors split by how they are matched.

    ``fast`` holds name and ROOT selectors (dict lookups); ``slow`` holds
    predicates in registration order. Either is None when empty.
    """

    fast: Optional[Dict[Union[str, Special], Changes]] = None
    slow: Optional[List[Tuple[Predicate, Changes]]] = None

    @property
    def is_empty(self) -> bool:
        return self.fast is None and self.slow is None


EMPTY_INDEX = SelectorIndex()


def is_changes(value: Any) -> bool:
    return isinstance(value, Mapping) or callable(value)


def _entries(selectors: Any) -> Iterable[Tuple[Any, Any]]:
    if isinstance(selectors, Mapping):
        return list(selectors.items())
    if isinstance(selectors, (str, bytes)):
        raise InvalidSelectorsMap(selectors)
    try:
        pairs = iter(selectors)
    except TypeError:
        raise InvalidSelectorsMap(selectors) from None

    entries = []
    for entry in pairs:
        if not (isinstance(entry, tuple) and len(entry) == 2):
            raise InvalidSelectorsMap(selectors)
        entries.append(entry)
    return entries


def check_children(changes: Mapping[Any, Any], children_key: Any) -> None:
    if children_key not in changes:
        return
    children = changes[children_key]
    if not isinstance(children, Mapping):
        log.warning(f"Children object related to the following error: {children!r}")
        raise InvalidChangesType(children, hint=False)


def index_selectors(
    selectors: Optional[Selectors], children_key: Any = CHILDREN
) -> SelectorIndex:
    """Validate ``selectors`` and partition it into fast and slow buckets.

    Mapping changes are checked in full here, children entry included, so a
    bad value fails before anything is rendered. Callback results can only be
    checked when the callback runs.
    """
    if selectors is None:
        return EMPTY_INDEX

    try:
        entries = _entries(selectors)
    except InvalidSelectorsMap:
        log.warning(f"selectors object related to the following error: {selectors!r}")
        raise

    fast: Dict[Union[str, Special], Changes] = {}
    slow: List[Tuple[Predicate, Changes]] = []

    for key, value in entries:
        if isinstance(key, str) or key is Special.ROOT:
            fast[key] = value
        elif callable(key) and not isinstance(key, Special):
            slow.append((key, value))
        else:
            log.warning(f"Selector object related to the following error: {key!r}")
            raise InvalidSelectorType(key)

        if not is_changes(value):
            log.warning(f"Changes object related to the following error: {value!r}")
            raise InvalidChangesType(value)
        if isinstance(value, Mapping):
            check_children(value, children_key)

    log.debug(f"Indexed selectors: {len(fast)} fast, {len(slow)} slow")
    return SelectorIndex(fast=fast or None, slow=slow or None)
