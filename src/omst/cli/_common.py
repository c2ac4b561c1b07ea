"""Shared CLI helpers."""

import logging
from pathlib import Path
from typing import Callable, Optional

import typer
from rich.console import Console
from rich.markup import escape

from .. import __version__
from ..config import OmstConfig, load_config
from ..exceptions import ConfigurationError
from ..logging_config import setup_logging
from ..models import Tier
from ..resolver import classify_current_user_or_unknown, try_classify_current_user

logger = logging.getLogger(__name__)

# stdout carries only the tier; everything else goes to stderr
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"omst {__version__}")
        raise typer.Exit(0)


def resolve_config(
    config: Optional[Path] = None,
    login_defs: Optional[Path] = None,
    unknown_on_error: Optional[bool] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> OmstConfig:
    """Build settings from CLI options."""
    overrides = {
        "login_defs": login_defs,
        "verbose": verbose,
        "quiet": quiet,
    }
    if unknown_on_error is not None:
        overrides["on_error"] = "unknown" if unknown_on_error else "fail"
    return load_config(config_file=config, **overrides)


def run(render: Callable[[Tier], str], **options) -> None:
    """Classify the current user and print ``render(tier)`` on stdout.

    Exits 1 on failure unless the configuration degrades errors to the
    unknown tier. Either way the failure is logged.
    """
    try:
        settings = resolve_config(**options)
    except ConfigurationError as e:
        # logging is configured from these settings, so it isn't up yet
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    setup_logging(settings)
    logger.debug("Using %s", settings)

    if settings.degrade_on_error:
        typer.echo(render(classify_current_user_or_unknown(settings)))
        return

    result = try_classify_current_user(settings)
    typer.echo(render(result.tier_or_unknown()))
    if result.error is not None:
        logger.error("%s", result.error)
        raise typer.Exit(1)
