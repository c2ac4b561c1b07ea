"""CLI entry points: ``omst`` prints the tier symbol, ``omst-be`` the word."""

from pathlib import Path
from typing import Optional

import typer

from ..models import Tier
from ._common import run, version_callback


def _make_app(help_text: str, render) -> typer.Typer:
    app = typer.Typer(
        help=help_text,
        add_completion=False,
        rich_markup_mode="rich",
    )

    @app.command()
    def main(
        config: Optional[Path] = typer.Option(
            None,
            "--config",
            "-c",
            help="TOML config file (overrides ~/.omst.toml)",
            dir_okay=False,
        ),
        login_defs: Optional[Path] = typer.Option(
            None,
            "--login-defs",
            help="File holding UID_MIN/UID_MAX (default: /etc/login.defs)",
            dir_okay=False,
        ),
        unknown_on_error: Optional[bool] = typer.Option(
            None,
            "--unknown-on-error/--fail-on-error",
            help="On failure print the unknown tier and exit 0 instead of exiting 1",
        ),
        verbose: bool = typer.Option(
            False, "--verbose", "-v", help="Log how the tier was decided"
        ),
        quiet: bool = typer.Option(
            False, "--quiet", "-q", help="Suppress error messages"
        ),
        version: bool = typer.Option(
            False,
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ) -> None:
        run(
            render,
            config=config,
            login_defs=login_defs,
            unknown_on_error=unknown_on_error,
            verbose=verbose,
            quiet=quiet,
        )

    return app


app = _make_app(
    "Reveal whomst thou art with a single character: "
    "% guest, $ user, @ system, # absolute, ? unknown.",
    Tier.be,
)

be_app = _make_app(
    "Reveal whomst thou art: print the current user's permission tier "
    "(guest, user, system, absolute).",
    Tier.display,
)


def main() -> None:
    app()


def main_be() -> None:
    be_app()
