"""Rich tree views of templates and output trees, for the CLI and the REPL."""

from typing import Any, Mapping

from rich.markup import escape
from rich.tree import Tree

from pystencil.core.template import TemplateElement, TemplateFragment, TemplateNode
from pystencil.runtime.vdom import VElement, VFragment


def _format_props(props: Mapping[Any, Any]) -> str:
    if not props:
        return ""
    parts = []
    for key, value in props.items():
        label = key if isinstance(key, str) else repr(key)
        parts.append(f"{label}={value!r}")
    return " [dim]" + escape(", ".join(parts)) + "[/dim]"


def _template_label(key: str, node: TemplateNode) -> str:
    if isinstance(node, TemplateFragment):
        return f"[magenta]{escape(key)}[/magenta] [dim](fragment)[/dim]"
    flags = []
    if node.is_root:
        flags.append("root")
    if node.single_fragment:
        flags.append("single_fragment")
    suffix = f" [yellow]({', '.join(flags)})[/yellow]" if flags else ""
    return (
        f"[cyan]{escape(key)}[/cyan]: [bold]{escape(node.class_name)}[/bold]"
        f"{suffix}{_format_props(node.props)}"
    )


def template_tree(template: TemplateNode, key: str = "") -> Tree:
    """Build a rich Tree for a template."""
    if not key:
        key = template.name if isinstance(template, TemplateElement) else "<fragment>"
    tree = Tree(_template_label(key, template))
    stack = [(tree, template)]
    while stack:
        branch, node = stack.pop()
        for child_key, child in node.children.items():
            stack.append((branch.add(_template_label(child_key, child)), child))
    return tree


def _output_label(key: str, node: Any) -> str:
    if isinstance(node, VFragment):
        return f"[magenta]{escape(key)}[/magenta] [dim](fragment)[/dim]"
    if isinstance(node, VElement):
        if node.is_host:
            kind = f"[bold]{escape(node.component)}[/bold]"
        else:
            component_name = getattr(node.component, "__name__", repr(node.component))
            kind = f"[green]<{escape(component_name)}>[/green]"
        props = {k: v for k, v in node.props.items() if k != "template"}
        return f"[cyan]{escape(key)}[/cyan]: {kind}{_format_props(props)}"
    return f"[cyan]{escape(key)}[/cyan]: {escape(repr(node))}"


def output_tree(node: Any, key: str = "<root>") -> Tree:
    """Build a rich Tree for an output tree of VElement/VFragment values."""
    tree = Tree(_output_label(key, node))
    stack = [(tree, node)]
    while stack:
        branch, current = stack.pop()
        children = getattr(current, "children", None)
        if not isinstance(children, Mapping):
            continue
        for child_key, child in children.items():
            stack.append((branch.add(_output_label(str(child_key), child)), child))
    return tree
