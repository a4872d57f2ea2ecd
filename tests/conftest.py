import pytest

from pystencil.reflection.api_dump import ApiDump
from pystencil.runtime.instance import Instance


@pytest.fixture
def api():
    return ApiDump.bundled()


@pytest.fixture
def panel(api):
    """Frame "Panel" with a "Title" label and two frames named "Item"."""
    return Instance(
        "Frame",
        "Panel",
        children=[
            Instance("TextLabel", "Title", {"Text": "Default"}, api=api),
            Instance("Frame", "Item", api=api),
            Instance("Frame", "Item", api=api),
        ],
        api=api,
    )


class RecordingRenderer:
    """Renderer that records every call, for asserting what was synthesized."""

    children_key = "children"

    def __init__(self):
        self.elements = []
        self.fragments = []

    def create_element(self, component, props=None, children=None):
        node = ("element", component, dict(props or {}), dict(children or {}))
        self.elements.append(node)
        return node

    def create_fragment(self, children):
        node = ("fragment", dict(children))
        self.fragments.append(node)
        return node


@pytest.fixture
def recording_renderer():
    return RecordingRenderer()
