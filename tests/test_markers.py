from pystencil.core.markers import (
    NONE,
    ROOT,
    Present,
    Removed,
    Special,
    Unset,
    lookup,
    outcome_of,
    overlay,
)


def test_outcomes():
    assert outcome_of(NONE) == Removed()
    assert outcome_of(None) == Present(None)
    assert outcome_of(0) == Present(0)


def test_lookup_distinguishes_absent_from_removed():
    overrides = {"a": NONE, "b": None}
    assert lookup(overrides, "a") == Removed()
    assert lookup(overrides, "b") == Present(None)
    assert lookup(overrides, "c") == Unset()


def test_overlay():
    base = {"Text": "Default", "Visible": True}
    result = overlay(base, {"Text": "Hi", "Visible": NONE, "ZIndex": 2, "Gone": NONE})
    assert result == {"Text": "Hi", "ZIndex": 2}
    # base is untouched
    assert base == {"Text": "Default", "Visible": True}


def test_special_keys_are_distinct_from_strings():
    assert ROOT != "root"
    assert {ROOT: 1, "root": 2}[ROOT] == 1
    assert set(Special) == {Special.ROOT, Special.NONE, Special.WRAP, Special.CHILDREN}
    assert repr(NONE) == "<pystencil.NONE>"
