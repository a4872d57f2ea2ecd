from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pystencil")
except PackageNotFoundError:
    __version__ = "unknown"

from pystencil import select
from pystencil.compiler.builder import template_from_instance
from pystencil.compiler.snapshot import properties_from_instance
from pystencil.core.exceptions import (
    InvalidCallbackResult,
    InvalidChangesType,
    InvalidSelectorsMap,
    InvalidSelectorType,
    InvalidSourceNode,
    StencilError,
    UnknownSourceType,
)
from pystencil.core.markers import CHILDREN, NONE, ROOT
from pystencil.core.template import TemplateElement, TemplateFragment
from pystencil.reflection.api_dump import ApiDump, get_api
from pystencil.runtime.component import component_from_instance, from_instance
from pystencil.runtime.instance import Instance, load_tree
from pystencil.runtime.synthesizer import (
    TemplateComponent,
    component_from_template,
    element_from_template,
    wrapped,
)
from pystencil.runtime.vdom import VDomRenderer, VElement, VFragment, el, fragment

build_template = template_from_instance
synthesize = element_from_template
make_component = component_from_template

__all__ = [
    "select",
    "ROOT",
    "NONE",
    "CHILDREN",
    "build_template",
    "synthesize",
    "make_component",
    "from_instance",
    "component_from_instance",
    "component_from_template",
    "element_from_template",
    "template_from_instance",
    "properties_from_instance",
    "wrapped",
    "TemplateComponent",
    "TemplateElement",
    "TemplateFragment",
    "Instance",
    "load_tree",
    "ApiDump",
    "get_api",
    "VDomRenderer",
    "VElement",
    "VFragment",
    "el",
    "fragment",
    "StencilError",
    "UnknownSourceType",
    "InvalidSourceNode",
    "InvalidSelectorsMap",
    "InvalidSelectorType",
    "InvalidChangesType",
    "InvalidCallbackResult",
]
