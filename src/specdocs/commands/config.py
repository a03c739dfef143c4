"""Config commands -- view and modify global configuration.

Provides the ``specdocs config`` sub-command group for reading,
updating, and resetting the user's global configuration file
(:class:`~specdocs.models.DocsConfig`). Settings are persisted in
the specdocs config directory and act as the lowest-precedence defaults
for ``specdocs generate``.
"""

from __future__ import annotations

from typing import Any

import typer

from specdocs.exceptions import InvalidUsageError
from specdocs.exit_codes import EXIT_INVALID_USAGE
from specdocs.output import error, info, print_record, success


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show(
    effective: bool = typer.Option(
        False,
        "--effective",
        help="Show the merged result of global, project and environment config.",
    ),
) -> None:
    """Show current configuration.

    Example::

        specdocs config show
        specdocs config show --effective --json
    """
    from specdocs.config import (
        get_config_dir,
        load_global_config,
        resolve_config,
    )
    from specdocs.exceptions import ConfigError

    try:
        config = resolve_config() if effective else load_global_config()
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    info(f"Config directory: {get_config_dir()}")
    print_record(config.model_dump(mode="json"))


_TRUE = ("true", "1", "yes")
_FALSE = ("false", "0", "no")


def _assign(data: dict[str, Any], key: str, value: str) -> object:
    """Store *value* at dotted *key* in *data*, coerced to the current field's kind.

    Raises:
        InvalidUsageError: If the key does not name a leaf setting or a boolean
            setting gets something other than yes/no.
    """
    *parents, leaf = key.split(".")
    target = data
    for part in parents:
        target = target.get(part)
        if not isinstance(target, dict):
            raise InvalidUsageError(f"Invalid config key: {key}")
    if leaf not in target or isinstance(target[leaf], dict):
        raise InvalidUsageError(f"Unknown config key: {key}")

    coerced: object
    if isinstance(target[leaf], bool):
        lowered = value.lower()
        if lowered not in _TRUE + _FALSE:
            raise InvalidUsageError(f"Expected true/false for {key}, got: {value}")
        coerced = lowered in _TRUE
    else:
        coerced = value or None
    target[leaf] = coerced
    return coerced


@config_app.command("set")
def config_set(
    key: str = typer.Argument(
        help="Config key (dot notation, e.g., 'landing.show_prompt')."
    ),
    value: str = typer.Argument(help="Value to set. An empty string clears optional keys."),
) -> None:
    """Set a configuration value.

    Booleans accept ``true``/``false``, ``1``/``0`` and ``yes``/``no``. The
    result is validated against :class:`~specdocs.models.DocsConfig` before
    it is saved.

    Example::

        specdocs config set base_url https://api.example.com
        specdocs config set format llms-txt
        specdocs config set landing.show_powered_by false
    """
    from pydantic import ValidationError

    from specdocs.config import load_global_config, save_global_config
    from specdocs.exceptions import SpecdocsError
    from specdocs.models import DocsConfig

    try:
        data = load_global_config().model_dump(mode="json")
        coerced = _assign(data, key, value)
        new_config = DocsConfig.model_validate(data)
    except ValidationError as exc:
        error(f"Invalid value for {key}: {exc}")
        raise typer.Exit(code=EXIT_INVALID_USAGE) from None
    except SpecdocsError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    save_global_config(new_config)
    success(f"Set {key} = {coerced}")


@config_app.command("reset")
def config_reset(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt."),
) -> None:
    """Reset configuration to defaults.

    Example::

        specdocs config reset --yes
    """
    from specdocs.config import save_global_config
    from specdocs.models import DocsConfig

    if not yes:
        confirmed = typer.confirm("Reset all config to defaults?")
        if not confirmed:
            info("Cancelled.")
            raise typer.Exit()

    save_global_config(DocsConfig())
    success("Configuration reset to defaults.")
