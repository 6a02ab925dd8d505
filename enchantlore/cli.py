from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from .config import ConfigError, load_config
from .config_env import load_env
from .display import Display, EnchantDisplay, proxy_for
from .enchants import EnchantRegistry
from .item import Item
from .legacy import legacy_to_tags
from .markup import TagMarkup
from .validation import load_enchants, load_item, load_viewer

app = typer.Typer(no_args_is_help=True, help="Render enchantment lore for items.")


def _fail(msg: object) -> None:
    typer.secho(f"ERR: {msg}", fg=typer.colors.RED, err=True)
    raise typer.Exit(1)


def _lore_panel(item: Item, title: str) -> Panel:
    body = Text("\n").join(item.lore) if item.lore else Text("(no lore)", style="dim")
    return Panel(body, title=title, expand=False)


@app.command()
def translate(
    text: str = typer.Argument(..., help="Legacy text using & or § colour codes."),
    render: bool = typer.Option(False, "--render", help="Also print the styled result."),
):
    """Print the tag markup for a legacy colour-coded string."""
    markup = legacy_to_tags(text)
    typer.echo(markup)
    if render:
        Console().print(TagMarkup().deserialize(markup))


@app.command()
def render(
    item_file: Path = typer.Argument(..., exists=True, dir_okay=False),
    enchants_file: Path = typer.Option(..., "--enchants", exists=True, dir_okay=False),
    config_file: Optional[Path] = typer.Option(None, "--config", dir_okay=False),
    viewer_file: Optional[Path] = typer.Option(None, "--viewer", exists=True, dir_okay=False),
    host: str = typer.Option("modern", "--host", help="legacy | modern stored-enchant handling"),
    hide: Optional[bool] = typer.Option(None, "--hide/--show", help="Override the item's own visibility."),
    times: int = typer.Option(1, "--times", min=1, help="Render this many times."),
    revert: bool = typer.Option(False, "--revert", help="Revert after rendering."),
):
    """Render an item's enchantment lore and print it."""
    load_env()
    try:
        config = load_config(config_file)
        registry: EnchantRegistry = load_enchants(enchants_file, config)
        item = load_item(item_file)
        viewer = load_viewer(viewer_file) if viewer_file else None
        proxy = proxy_for(host)
    except (ConfigError, ValueError) as e:
        _fail(e)

    module = EnchantDisplay(registry, config, proxy=proxy)
    display = Display()
    display.register(module)
    console = Console()
    for _ in range(times):
        if hide is None:
            # visibility derived from the item itself
            display.display(item, viewer)
        else:
            module.render(item, viewer, hide=hide)
    console.print(_lore_panel(item, f"{item.material} (rendered)"))
    flags = ", ".join(sorted(item.flags)) or "-"
    console.print(f"flags: {flags}", markup=False)
    if revert:
        module.revert(item)
        console.print(_lore_panel(item, f"{item.material} (reverted)"))
        flags = ", ".join(sorted(item.flags)) or "-"
        console.print(f"flags: {flags}", markup=False)


def main() -> None:  # pragma: no cover - console script
    app()


__all__ = ["app", "main"]
