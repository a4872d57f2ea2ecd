from types import MappingProxyType

import pytest

from pystencil.compiler.snapshot import is_snapshot_property, properties_from_instance
from pystencil.core.exceptions import UnknownSourceType
from pystencil.reflection.api_dump import PropertyInfo
from pystencil.runtime.instance import Instance


class FlakyLabel(Instance):
    """Label whose TextSize accessor blows up."""

    def get_property(self, name):
        if name == "TextSize":
            raise RuntimeError("TextSize is unavailable")
        return super().get_property(name)


def test_only_non_default_properties(api):
    label = Instance("TextLabel", "Title", {"Text": "Hello", "TextSize": 8}, api=api)
    props = properties_from_instance(label, api)
    # TextSize equals its default, so it is left out
    assert dict(props) == {"Text": "Hello"}


def test_structural_properties_excluded(api):
    frame = Instance("Frame", "Panel", {"Transparency": 0.5}, api=api)
    props = properties_from_instance(frame, api)
    assert "Name" not in props
    assert "ClassName" not in props
    assert "Parent" not in props
    assert "Transparency" not in props


def test_inaccessible_properties_excluded(api):
    label = Instance(
        "TextLabel",
        "Title",
        {
            "RobloxLocked": True,  # plugin security
            "UniqueId": "abc",  # NotScriptable
            "TextBounds": [10, 10],  # ReadOnly
            "Visible": False,
        },
        api=api,
    )
    assert dict(properties_from_instance(label, api)) == {"Visible": False}


def test_deprecated_writable_property_kept(api):
    label = Instance("TextLabel", "Title", {"Draggable": True}, api=api)
    assert dict(properties_from_instance(label, api)) == {"Draggable": True}


def test_inherited_properties_included(api):
    button = Instance("TextButton", "Buy", {"AutoButtonColor": False, "ZIndex": 3}, api=api)
    assert dict(properties_from_instance(button, api)) == {
        "AutoButtonColor": False,
        "ZIndex": 3,
    }


def test_failing_property_is_skipped(api):
    label = FlakyLabel("TextLabel", "Title", {"Text": "Still here", "TextSize": 24}, api=api)
    props = properties_from_instance(label, api)
    assert props["Text"] == "Still here"
    assert "TextSize" not in props


def test_snapshot_is_read_only(api):
    props = properties_from_instance(Instance("Frame", "Panel", {"Visible": False}, api=api), api)
    assert isinstance(props, MappingProxyType)
    with pytest.raises(TypeError):
        props["Visible"] = True  # type: ignore[index]


def test_unknown_class(api):
    widget = Instance("Widget3000", "Thing", api=api)
    with pytest.raises(UnknownSourceType) as exc_info:
        properties_from_instance(widget, api)
    assert exc_info.value.class_name == "Widget3000"
    assert exc_info.value.source is widget


def test_is_snapshot_property():
    assert is_snapshot_property(PropertyInfo("Text"))
    assert not is_snapshot_property(PropertyInfo("Name"))
    assert not is_snapshot_property(PropertyInfo("Text", read_security="PluginSecurity"))
    assert not is_snapshot_property(PropertyInfo("Text", write_security="RobloxScriptSecurity"))
    assert not is_snapshot_property(PropertyInfo("Text", tags=("ReadOnly",)))
    assert is_snapshot_property(PropertyInfo("Draggable", tags=("Deprecated",)))
