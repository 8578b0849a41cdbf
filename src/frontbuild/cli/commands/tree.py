"""CLI command to display all commands in a hierarchical tree."""

from __future__ import annotations

from dataclasses import dataclass, field

import click
import typer
from rich.console import Console
from typer.main import get_command

from ..base import get_logger

logger = get_logger(__name__)

PREFERRED_ORDER = ["develop", "build", "run", "clean"]


@dataclass
class OptionInfo:
    """Information about a command option/parameter."""

    name: str
    help_text: str | None = None
    is_flag: bool = False


@dataclass
class CommandNode:
    """Represents a command or command group in the CLI tree."""

    name: str
    help_text: str | None = None
    is_group: bool = False
    is_broken: bool = False
    options: list[OptionInfo] = field(default_factory=list)
    children: list[CommandNode] = field(default_factory=list)


def _extract_options(click_cmd: click.Command) -> list[OptionInfo]:
    """Extract option information from a Click command."""
    options = []
    for param in click_cmd.params:
        if not isinstance(param, click.Option):
            continue
        names = param.opts or param.secondary_opts or []
        if not names:
            continue
        is_flag = bool(param.is_flag)
        name = ", ".join(names)
        if not is_flag:
            name = f"{name} {param.type.name.upper()}"
        options.append(OptionInfo(name=name, help_text=param.help, is_flag=is_flag))
    return options


def _build_node(click_cmd: click.Command, name: str) -> CommandNode:
    """Convert a Click command/group into a CommandNode recursively."""
    is_group = isinstance(click_cmd, click.Group)
    node = CommandNode(
        name=name,
        help_text=click_cmd.get_short_help_str() or None,
        is_group=is_group,
        options=[] if is_group else _extract_options(click_cmd),
    )
    if is_group:
        for sub_name, sub_cmd in click_cmd.commands.items():
            node.children.append(_build_node(sub_cmd, sub_name))

    def sort_key(child: CommandNode) -> tuple[int, str]:
        try:
            return (PREFERRED_ORDER.index(child.name), child.name)
        except ValueError:
            return (len(PREFERRED_ORDER), child.name)

    node.children.sort(key=sort_key)
    return node


def walk_typer_app(typer_app: typer.Typer, name: str | None = None) -> CommandNode:
    """Walk a Typer app and build a command tree."""
    resolved = name or typer_app.info.name or "frontbuild"
    try:
        click_app = get_command(typer_app)
    except Exception:  # noqa: BLE001
        logger.debug("Could not resolve click command", exc_info=True)
        return CommandNode(name=resolved, is_broken=True)
    return _build_node(click_app, resolved)


def filter_tree(
    node: CommandNode,
    filter_verb: str | None = None,
    verbose: bool = False,
) -> CommandNode | None:
    """Keep only nodes named filter_verb (plus their parents); strip details unless verbose."""
    if not verbose:
        node.help_text = None
        node.options = []

    if filter_verb is None or node.name == filter_verb:
        kept = [filter_tree(child, None, verbose) for child in node.children]
    else:
        kept = [filter_tree(child, filter_verb, verbose) for child in node.children]
    node.children = [child for child in kept if child is not None]

    if filter_verb is None or node.name == filter_verb or node.children:
        return node
    return None


def render_tree(
    node: CommandNode,
    console: Console | None = None,
    indent: int = 0,
    indent_str: str = "  ",
) -> None:
    """Render a command tree using Rich with indentation and colors."""
    if console is None:
        console = Console()

    prefix = indent_str * indent
    if node.is_broken:
        console.print(f"{prefix}[red dim]{node.name} [BROKEN][/red dim]")
        return

    colors = ["bold cyan", "yellow", "blue", "green"]
    color = colors[min(indent, len(colors) - 1)]
    label = f"{prefix}[{color}]{node.name}[/{color}]"
    if node.help_text:
        label += f" [dim]— {node.help_text}[/dim]"
    console.print(label)

    if node.options:
        option_part = " ".join(f"[dim]\\[{opt.name}][/dim]" for opt in node.options)
        console.print(f"{prefix}{indent_str}{option_part}")

    for child in node.children:
        render_tree(child, console, indent=indent + 1, indent_str=indent_str)


def tree_command(
    typer_app: typer.Typer,
    filter_verb: str | None = None,
    verbose: bool = False,
    console: Console | None = None,
) -> None:
    """Display all CLI commands in a hierarchical tree format.

    Args:
        typer_app: Root Typer application to introspect.
        filter_verb: Optional command name to filter by (e.g. "build").
        verbose: If True, show help text and options.
        console: Rich console to print to (a new one if None).
    """
    console = console or Console()
    root_node = walk_typer_app(typer_app)
    filtered = filter_tree(root_node, filter_verb=filter_verb, verbose=verbose)
    if filtered is None:
        console.print("[yellow]No commands match the specified filter.[/yellow]")
        return
    render_tree(filtered, console)
