# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tasklist import configuration
from tasklist.model.sort_config import SortDirection, SortKey
from tasklist.repository.configuration import CONFIGURATION_REPO
from tasklist.terminal.custom_typer import AliasedTyperGroup
from tasklist.terminal.parse import parse_sort_direction, parse_sort_key
from tasklist.terminal.validate import validate_log_level, validate_page_size

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)


def _enabled(value: bool) -> str:
    return "✓ Enabled" if value else "✗ Disabled"


@app.command("view, v")
def view() -> None:
    """Display current configuration settings."""
    config = CONFIGURATION_REPO.get_config()

    console = Console()
    table = Table()
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="magenta")

    table.add_row("page_size", str(config["page_size"]))
    table.add_row("sort_primary", config["sort_primary"])
    table.add_row("sort_secondary", config["sort_secondary"] or "None")
    table.add_row("sort_direction", config["sort_direction"])
    table.add_row("show_header", _enabled(config["show_header"]))
    table.add_row("clear_ids_on_view", _enabled(config["clear_ids_on_view"]))
    table.add_row("log_level", config["log_level"])
    table.add_row("data_path", escape(str(configuration.DATA_PATH)))
    table.add_row("config_path", escape(str(configuration.APP_CONFIG_PATH)))

    console.print(table)


@app.command("set, s")
def set(
    page_size: Annotated[
        Optional[int],
        typer.Option(
            "--page-size", callback=validate_page_size, help="5, 10, 25 or 50"
        ),
    ] = None,
    sort: Annotated[
        Optional[SortKey],
        typer.Option("--sort", parser=parse_sort_key, help="Default primary sort"),
    ] = None,
    then: Annotated[
        Optional[SortKey],
        typer.Option("--then", parser=parse_sort_key, help="Default secondary sort"),
    ] = None,
    remove_then: Annotated[
        bool, typer.Option("--remove-then", help="Remove the default secondary sort")
    ] = False,
    direction: Annotated[
        Optional[SortDirection],
        typer.Option(
            "--direction", parser=parse_sort_direction, help="Default due date direction"
        ),
    ] = None,
    show_header: Annotated[
        Optional[bool],
        typer.Option("--show-header/--no-show-header", help="Show report headers"),
    ] = None,
    clear_ids_on_view: Annotated[
        Optional[bool],
        typer.Option(
            "--clear-ids-on-view/--no-clear-ids-on-view",
            help="Renumber task ids every time tasks are listed",
        ),
    ] = None,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", callback=validate_log_level),
    ] = None,
    data_path: Annotated[
        Optional[str],
        typer.Option("--data-path", help="Directory holding task data"),
    ] = None,
) -> None:
    """Update configuration settings."""
    config = CONFIGURATION_REPO.get_config()
    primary = sort or SortKey(config["sort_primary"])
    if then is not None and then == primary:
        raise typer.BadParameter("Secondary sort must differ from the primary sort")

    CONFIGURATION_REPO.update_config(
        page_size=page_size,
        sort_primary=sort.value if sort is not None else None,
        sort_secondary=then.value if then is not None else None,
        remove_sort_secondary=remove_then,
        sort_direction=direction.value if direction is not None else None,
        show_header=show_header,
        clear_ids_on_view=clear_ids_on_view,
        log_level=log_level,
        data_path=data_path,
    )
    CONFIGURATION_REPO.flush()

    console = Console()
    console.print("[green]Configuration updated[/green]")
