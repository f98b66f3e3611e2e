from __future__ import annotations

import typer

from .commands import config_cmd, logs_cmd, tools_cmd
from .logging_ import setup_logging


def _build_app() -> typer.Typer:
    app = typer.Typer(
        name="portainer-tools",
        help="Portainer tools CLI",
        no_args_is_help=True,
    )

    app.add_typer(tools_cmd.app, name="tools")
    app.add_typer(config_cmd.app, name="config")
    app.command("logs")(logs_cmd.logs)

    @app.callback()
    def _main(
            verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logs."),
    ):
        setup_logging(verbose)

    return app


app = _build_app()
