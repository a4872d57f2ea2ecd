"""Predicate selectors for changing descendant elements.

These selectors are slower than name-based selection: names are looked up
in a dict, while every predicate runs against every element.

Usage:
    from pystencil import select

    Template({
        select.class_pattern(r"^Text"): {"TextColor3": [255, 255, 255]},
        select.every(select.tag("Primary"), select.is_a("GuiButton")): {"Visible": True},
    })
"""

import re
from typing import Any, Optional, Pattern, Union

from pystencil.core.source import SourceNode
from pystencil.reflection.api_dump import ApiDump, get_api
from pystencil.runtime.selectors import Predicate


def _resolve(api: Optional[ApiDump]) -> ApiDump:
    return api if api is not None else get_api()


def _readable(instance: SourceNode, prop: str, api: Optional[ApiDump]) -> bool:
    info = _resolve(api).get(instance.class_name)
    if info is None:
        return False
    prop_info = info.properties().get(prop)
    return prop_info is not None and prop_info.is_readable


def prop(prop: str, value: Any, *, api: Optional[ApiDump] = None) -> Predicate:
    """Select elements whose property ``prop`` equals ``value``."""

    def selector(instance: SourceNode) -> bool:
        if not _readable(instance, prop, api):
            return False
        return instance.get_property(prop) == value

    return selector


def name(name: str, *, api: Optional[ApiDump] = None) -> Predicate:
    """Select elements by name.

    Slower than the plain ``{"name": changes}`` form.
    """
    return prop("Name", name, api=api)


def class_(class_name: str, *, api: Optional[ApiDump] = None) -> Predicate:
    """Select elements by exact class name."""
    return prop("ClassName", class_name, api=api)


def is_a(class_name: str, *, api: Optional[ApiDump] = None) -> Predicate:
    """Select elements whose class is ``class_name`` or inherits from it."""

    def selector(instance: SourceNode) -> bool:
        return _resolve(api).is_a(instance.class_name, class_name)

    return selector


def prop_pattern(
    prop: str, pattern: Union[str, Pattern[str]], *, api: Optional[ApiDump] = None
) -> Predicate:
    """Select elements whose property ``prop``, as a string, matches ``pattern``."""
    compiled = re.compile(pattern)

    def selector(instance: SourceNode) -> bool:
        if not _readable(instance, prop, api):
            return False
        return compiled.search(str(instance.get_property(prop))) is not None

    return selector


def name_pattern(
    pattern: Union[str, Pattern[str]], *, api: Optional[ApiDump] = None
) -> Predicate:
    return prop_pattern("Name", pattern, api=api)


def class_pattern(
    pattern: Union[str, Pattern[str]], *, api: Optional[ApiDump] = None
) -> Predicate:
    """Select elements whose class name matches ``pattern``.

    For example ``^Text.+$`` matches both TextLabel and TextBox.
    """
    return prop_pattern("ClassName", pattern, api=api)


def attribute(attribute: str, value: Any) -> Predicate:
    """Select elements whose attribute equals ``value``."""

    def selector(instance: SourceNode) -> bool:
        return instance.get_attribute(attribute) == value

    return selector


def tag(tag: str) -> Predicate:
    """Select elements whose source node carries ``tag``."""

    def selector(instance: SourceNode) -> bool:
        return instance.has_tag(tag)

    return selector


def some(*selectors: Predicate) -> Predicate:
    """Select elements matched by at least one of ``selectors``."""

    def selector(instance: SourceNode) -> bool:
        return any(s(instance) for s in selectors)

    return selector


def every(*selectors: Predicate) -> Predicate:
    """Select elements matched by all of ``selectors``."""

    def selector(instance: SourceNode) -> bool:
        return all(s(instance) for s in selectors)

    return selector


def no(selector: Predicate) -> Predicate:
    """Select elements the given selector does not match."""

    def negated(instance: SourceNode) -> bool:
        return not selector(instance)

    return negated
