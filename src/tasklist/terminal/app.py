# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer

from tasklist.terminal import configuration, task
from tasklist.terminal.custom_typer import AliasedTyperGroup
from tasklist.view import state as view_state

app = typer.Typer(
    cls=AliasedTyperGroup,
    help="tasklist - personal tasks with change history",
    no_args_is_help=True,
)
app.add_typer(task.app, name="task, t")
app.add_typer(configuration.app, name="config, c")


@app.callback()
def main_callback(
    no_header: Annotated[
        bool,
        typer.Option(
            "--no-header",
            "-nh",
            help="Suppress header output in reports",
        ),
    ] = False,
    clear_ids: Annotated[
        Optional[bool],
        typer.Option(
            "--clear-ids/--no-clear-ids",
            help="Renumber task ids on the next list, overriding the configuration",
        ),
    ] = None,
) -> None:
    """
    tasklist - personal tasks with change history

    Global options that apply to all commands.
    """
    if no_header:
        view_state.set_show_header(False)
    if clear_ids is not None:
        view_state.set_clear_ids(clear_ids)


def run() -> None:
    app()
