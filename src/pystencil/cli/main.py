"""Main CLI entry point."""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import rich_click as click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from pystencil import __version__
from pystencil.compiler.builder import template_from_instance
from pystencil.core.exceptions import StencilError
from pystencil.core.markers import CHILDREN, NONE, ROOT
from pystencil.reflection.api_dump import ApiDump, get_api
from pystencil.runtime.debug import output_tree, template_tree
from pystencil.runtime.instance import load_tree
from pystencil.runtime.synthesizer import element_from_template
from pystencil.runtime.vdom import el

console = Console()

ROOT_KEY = "@root"
CHILDREN_KEY = "@children"

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.STYLE_HELPTEXT_FIRST = True
click.rich_click.STYLE_COMMANDS_TABLE_SHOW_LINES = False
click.rich_click.STYLE_COMMANDS_TABLE_PAD_EDGE = False
click.rich_click.STYLE_COMMANDS_TABLE_BOX = None
click.rich_click.STYLE_OPTIONS_TABLE_BOX = None
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.ERRORS_SUGGESTION = "Try running 'pystencil --help' for more information."

# Cyan theme
click.rich_click.STYLE_HEADER_TEXT = "bold cyan"
click.rich_click.STYLE_OPTION = "cyan"
click.rich_click.STYLE_SWITCH = "cyan"
click.rich_click.STYLE_METAVAR = "dim white"
click.rich_click.STYLE_USAGE_COMMAND = "cyan"
click.rich_click.STYLE_USAGE = "dim"

click.rich_click.COMMAND_GROUPS = {
    "pystencil": [
        {
            "name": "Commands",
            "commands": ["inspect", "render"],
        }
    ]
}


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, markup=False)],
    )


def _change_value(value: Any) -> Any:
    # JSON null deletes the prop or child
    return NONE if value is None else value


def _child_value(value: Any) -> Any:
    if value is None:
        return NONE
    if not isinstance(value, dict) or "ClassName" not in value:
        raise click.BadParameter(
            f"Children must be null or {{'ClassName': ..., 'Properties': ...}}, got {value!r}",
            param_hint="--selectors",
        )
    return el(value["ClassName"], value.get("Properties") or {})


def selectors_from_json(data: Any) -> Dict[Any, Any]:
    """Convert a JSON selectors document into a selectors mapping.

    ``"@root"`` selects the template root, ``"@children"`` holds child
    overrides, and ``null`` means delete.
    """
    if not isinstance(data, dict):
        raise click.BadParameter("Selectors file must contain a JSON object", param_hint="--selectors")

    selectors: Dict[Any, Any] = {}
    for key, changes in data.items():
        if not isinstance(changes, dict):
            raise click.BadParameter(
                f"Changes for {key!r} must be a JSON object, got {changes!r}",
                param_hint="--selectors",
            )
        converted: Dict[Any, Any] = {}
        for prop, value in changes.items():
            if prop == CHILDREN_KEY:
                converted[CHILDREN] = {
                    name: _child_value(child) for name, child in (value or {}).items()
                }
            else:
                converted[prop] = _change_value(value)
        selectors[ROOT if key == ROOT_KEY else key] = converted
    return selectors


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="pystencil")
@click.option(
    "--api-dump",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Reflection dump to use instead of the bundled one.",
)
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx: click.Context, api_dump: Optional[Path], verbose: bool) -> None:
    """[bold cyan]pystencil[/bold cyan]: templates from authored trees."""
    _configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["api"] = ApiDump.load(api_dump) if api_dump else get_api()


@cli.command()
@click.argument("tree", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def inspect(ctx: click.Context, tree: Path) -> None:
    """Build the template for TREE and print it."""
    api = ctx.obj["api"]
    try:
        template = template_from_instance(load_tree(tree, api=api), api=api)
    except (StencilError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        sys.exit(1)
    console.print(template_tree(template))


@cli.command()
@click.argument("tree", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--selectors",
    "selectors_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="JSON file of {selector: changes}.",
)
@click.pass_context
def render(ctx: click.Context, tree: Path, selectors_file: Optional[Path]) -> None:
    """Synthesize TREE, optionally with selectors, and print the output tree."""
    api = ctx.obj["api"]
    selectors = None
    if selectors_file is not None:
        selectors = selectors_from_json(json.loads(selectors_file.read_text("utf-8")))

    try:
        template = template_from_instance(load_tree(tree, api=api), api=api)
        output = element_from_template(template, selectors)
    except (StencilError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        sys.exit(1)
    console.print(output_tree(output, key=template.name))


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
