"""Special keys and override outcomes."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Union


class Special(Enum):
    """Closed set of marker keys and values understood by the engine."""

    ROOT = "root"
    NONE = "none"
    WRAP = "wrap"
    CHILDREN = "children"

    def __repr__(self) -> str:
        return f"<pystencil.{self.name}>"


ROOT = Special.ROOT
NONE = Special.NONE
WRAP = Special.WRAP
CHILDREN = Special.CHILDREN


@dataclass(frozen=True)
class Present:
    value: Any


@dataclass(frozen=True)
class Removed:
    pass


@dataclass(frozen=True)
class Unset:
    pass


Outcome = Union[Present, Removed, Unset]


def outcome_of(value: Any) -> Outcome:
    """Classify an override value supplied by caller code."""
    if value is Special.NONE:
        return Removed()
    return Present(value)


def lookup(overrides: Mapping[Any, Any], key: Any) -> Outcome:
    """Look up ``key`` in an override map, distinguishing absent from removed."""
    if key not in overrides:
        return Unset()
    return outcome_of(overrides[key])


def overlay(base: Mapping[Any, Any], overrides: Mapping[Any, Any]) -> dict:
    """Return a copy of ``base`` with ``overrides`` applied on top.

    ``NONE`` values delete the key from the result.
    """
    result = dict(base)
    for key in overrides:
        outcome = lookup(overrides, key)
        if isinstance(outcome, Removed):
            result.pop(key, None)
        elif isinstance(outcome, Present):
            result[key] = outcome.value
        else:
            raise TypeError(f"Unhandled override outcome {outcome!r}")
    return result
