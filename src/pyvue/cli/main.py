"""Main CLI entry point."""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import rich_click as click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

from pyvue import __version__
from pyvue.config import TemplateConfig
from pyvue.exceptions import TemplateError
from pyvue.runtime.component import Component
from pyvue.runtime.viewmodel import render

console = Console(stderr=True)
logger = logging.getLogger("pyvue")

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.STYLE_HELPTEXT_FIRST = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.ERRORS_SUGGESTION = "Try running 'pyvue --help' for more information."

# Cyan theme
click.rich_click.STYLE_HEADER_TEXT = "bold cyan"
click.rich_click.STYLE_OPTION = "cyan"
click.rich_click.STYLE_SWITCH = "cyan"
click.rich_click.STYLE_METAVAR = "dim white"
click.rich_click.STYLE_USAGE_COMMAND = "cyan"
click.rich_click.STYLE_USAGE = "dim"


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, markup=False)],
        force=True,
    )


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text("utf-8"))
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"Invalid JSON in {path}: {e}") from e


def _parse_component_option(value: str) -> Tuple[str, Path]:
    if "=" not in value:
        raise click.BadParameter(
            "Component must be in format 'tag=path/to/template.html'",
            param_hint="--component",
        )
    tag, path = value.split("=", 1)
    return tag.strip(), Path(path.strip())


def load_component(
    template_path: Path,
    data: Optional[Any] = None,
    config: Optional[TemplateConfig] = None,
) -> Component:
    """Load a component from a template file.

    A `<stem>.json` sidecar next to the template may hold `data` and `props`.
    Explicit `data` takes precedence over the sidecar's.
    """
    meta: Dict[str, Any] = {}
    sidecar = template_path.with_suffix(".json")
    if sidecar.exists():
        meta = _read_json(sidecar)
    return Component(
        template_path.read_text("utf-8"),
        data=data if data is not None else dict(meta.get("data", {})),
        props=meta.get("props", []),
        name=template_path.stem,
        config=config,
    )


def build_component(
    template: Path,
    data_file: Optional[Path],
    components: List[str],
    strict: bool,
) -> Component:
    config = TemplateConfig(strict_interpolation=strict, strict_conditionals=strict)
    data = _read_json(data_file) if data_file else None
    root = load_component(template, data, config)

    subs = [_parse_component_option(value) for value in components]
    loaded = [(tag, load_component(path, config=config)) for tag, path in subs]
    # Every loaded component may use every other one, so nesting works.
    for owner in [root] + [comp for _, comp in loaded]:
        for tag, comp in loaded:
            owner.register(tag, comp)
    return root


def _render_to(component: Component, out: Optional[Path]) -> None:
    html = render(component)
    if out:
        out.write_text(html, "utf-8")
        logger.info("Wrote %s", out)
    else:
        click.echo(html)


def _report(error: TemplateError) -> None:
    console.print(
        Panel(str(error), title=type(error).__name__, border_style="red", expand=False)
    )


_template_options = [
    click.argument(
        "template", type=click.Path(exists=True, dir_okay=False, path_type=Path)
    ),
    click.option(
        "--data",
        "data_file",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        default=None,
        help="JSON file with the template data",
    ),
    click.option(
        "--component",
        "-c",
        "components",
        multiple=True,
        help="Subcomponent as TAG=TEMPLATE (repeatable)",
    ),
    click.option(
        "--strict",
        is_flag=True,
        help="Fail on unresolved placeholders and v-if fields",
    ),
    click.option("--out", "-o", type=click.Path(path_type=Path), default=None),
    click.option("--verbose", "-v", is_flag=True, help="Enable debug logging"),
]


def template_options(fn):
    for option in reversed(_template_options):
        fn = option(fn)
    return fn


@click.group(
    help=f"""
[bold white on cyan] pyvue [/] [bold cyan]v{__version__}[/] Render v- directive templates.

Run [bold cyan]pyvue render TEMPLATE --data data.json[/] to render once.
Run [bold cyan]pyvue dev TEMPLATE --data data.json[/] to re-render on change.
"""
)
@click.version_option(__version__)
def cli() -> None:
    pass


@cli.command("render")
@template_options
def render_command(
    template: Path,
    data_file: Optional[Path],
    components: Tuple[str, ...],
    strict: bool,
    out: Optional[Path],
    verbose: bool,
) -> None:
    """Render a template to HTML."""
    configure_logging(verbose)
    try:
        component = build_component(template, data_file, list(components), strict)
        _render_to(component, out)
    except TemplateError as e:
        _report(e)
        sys.exit(1)


@cli.command()
@template_options
def dev(
    template: Path,
    data_file: Optional[Path],
    components: Tuple[str, ...],
    strict: bool,
    out: Optional[Path],
    verbose: bool,
) -> None:
    """Render a template and re-render whenever its files change."""
    from watchfiles import watch

    configure_logging(verbose)
    paths = [template] + ([data_file] if data_file else [])
    paths += [_parse_component_option(value)[1] for value in components]
    watched = sorted({str(p.resolve().parent) for p in paths})

    def run() -> None:
        try:
            component = build_component(template, data_file, list(components), strict)
            _render_to(component, out)
        except TemplateError as e:
            _report(e)
        except click.BadParameter as e:
            console.print(f"[red]{e.format_message()}[/]")

    run()
    console.print(f"👀 Watching [cyan]{', '.join(watched)}[/] for changes")
    for changes in watch(*watched):
        logger.debug("Changed: %s", sorted(path for _, path in changes))
        run()


@cli.command()
@click.argument("name")
@click.option(
    "--dir",
    "components_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("components"),
    help="Directory to create the component in",
)
def new(name: str, components_dir: Path) -> None:
    """Scaffold a new component template."""
    from pyvue.cli.generators import generate_component

    try:
        template_file, sidecar_file = generate_component(name, components_dir)
    except ValueError as e:
        raise click.UsageError(str(e))
    console.print(f"✨ Created [cyan]{template_file}[/] and [cyan]{sidecar_file}[/]")


if __name__ == "__main__":
    cli()
