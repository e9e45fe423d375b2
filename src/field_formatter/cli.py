"""
field-formatter: CLI for converting between freeform item lines and structured sections.

Usage:
  field-formatter parse [OPTIONS] SRC
  field-formatter render [OPTIONS] SRC
  field-formatter action [OPTIONS] SRC SECTION ITEM ACTION
  field-formatter check-config CONFIG

Examples:
  field-formatter parse schedule.txt
  field-formatter parse schedule.txt --mode plain --fixed-type generic
  field-formatter render stored.json -c formatter.yaml
  field-formatter action stored.json 0 2 increment -v
  field-formatter check-config formatter.yaml -vv
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import typer

from field_formatter.config import default_config, load_config
from field_formatter.enums import ViewMode
from field_formatter.errors import ConfigError
from field_formatter.schemas import FormatterConfig
from field_formatter.store import FormatterStore

app = typer.Typer(help=__doc__, no_args_is_help=True)


def setup_logging(verbose: int):
    """Set up logging based on verbosity level."""
    if verbose == 0:
        level = logging.WARNING
    elif verbose == 1:
        level = logging.INFO
    else:  # verbose >= 2
        level = logging.DEBUG

    logging.basicConfig(level=level, format="%(levelname)s:%(name)s:%(message)s")


def _read_source(src: str) -> str:
    if src == "-":
        return sys.stdin.read()
    path = Path(src)
    if not path.is_file():
        raise typer.BadParameter(f"No such file: {src}", param_hint="SRC")
    return path.read_text(encoding="utf-8")


def _config(path: Optional[Path]) -> FormatterConfig:
    if path is None:
        return default_config()
    try:
        return load_config(path)
    except ConfigError as e:
        raise typer.BadParameter(str(e), param_hint="--config") from e


CONFIG_OPTION = typer.Option(
    None, "--config", "-c", help="JSON or YAML formatter config (default: built-in)"
)
VERBOSE_OPTION = typer.Option(
    0,
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (-v for INFO, -vv for DEBUG)",
)


@app.command("parse", help="Parse freeform text or an envelope and print the stored value.")
def parse(
    src: str = typer.Argument(..., help="Input file, or '-' for stdin"),
    config: Optional[Path] = CONFIG_OPTION,
    fixed_type: Optional[str] = typer.Option(
        None,
        "--fixed-type",
        "-t",
        help="Single fixed section type: plain output whenever every section is plain",
    ),
    mode: ViewMode = typer.Option(
        ViewMode.HYBRID,
        "--mode",
        "-m",
        help="View mode for freeform input and new sections",
    ),
    verbose: int = VERBOSE_OPTION,
) -> None:
    setup_logging(verbose)
    store = FormatterStore.from_input(
        _read_source(src), _config(config), fixed_type=fixed_type, default_mode=mode
    )
    logging.info(f"Loaded {len(store.sections)} section(s)")
    typer.echo(store.externalize())


@app.command("render", help="Print the plain text of every section.")
def render(
    src: str = typer.Argument(..., help="Input file, or '-' for stdin"),
    config: Optional[Path] = CONFIG_OPTION,
    verbose: int = VERBOSE_OPTION,
) -> None:
    setup_logging(verbose)
    store = FormatterStore.from_input(_read_source(src), _config(config))
    blocks = [store.plain_text(i) for i in range(len(store.sections))]
    typer.echo("\n\n".join(blocks))


@app.command("action", help="Apply an item action and print the stored value.")
def action(
    src: str = typer.Argument(..., help="Input file, or '-' for stdin"),
    section: int = typer.Argument(..., help="Section index"),
    item: int = typer.Argument(..., help="Item index within the section"),
    action_name: str = typer.Argument(
        ..., metavar="ACTION", help="increment, decrement, remove or a transition key"
    ),
    config: Optional[Path] = CONFIG_OPTION,
    verbose: int = VERBOSE_OPTION,
) -> None:
    setup_logging(verbose)
    store = FormatterStore.from_input(_read_source(src), _config(config))
    if not 0 <= section < len(store.sections):
        raise typer.BadParameter(
            f"Section {section} out of range (0..{len(store.sections) - 1})",
            param_hint="SECTION",
        )
    if not 0 <= item < len(store.sections[section].items):
        raise typer.BadParameter(f"Item {item} out of range", param_hint="ITEM")

    store.apply_item_action(section, item, action_name)
    typer.echo(store.externalize())


@app.command("check-config", help="Validate a formatter config and summarize it.")
def check_config(
    path: Path = typer.Argument(..., help="JSON or YAML config file"),
    verbose: int = VERBOSE_OPTION,
) -> None:
    setup_logging(verbose)
    cfg = _config(path)
    if not cfg.section_types and not cfg.row_types:
        typer.echo("config is empty or invalid", err=True)
        raise typer.Exit(code=1)

    for name, section_cfg in cfg.section_types.items():
        allowed = ", ".join(section_cfg.allowed_row_types or ["text"])
        typer.echo(f"section {name}: {section_cfg.label} [{allowed}]")
    for name, row_cfg in cfg.row_types.items():
        kinds = ", ".join(str(seg.kind) for seg in row_cfg.segments)
        transitions = ", ".join(f"{k}->{v}" for k, v in row_cfg.transitions.items())
        typer.echo(
            f"row {name}: {row_cfg.label or name} [{kinds}]"
            + (f" {{{transitions}}}" if transitions else "")
        )


if __name__ == "__main__":
    app()
