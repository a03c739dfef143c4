"""Where specdocs keeps its defaults and how they combine with CLI flags.

Settings for ``specdocs generate`` come from five layers, highest first:
command-line flags, ``SPECDOCS_*`` environment variables, a ``specdocs.json``
in the working directory, the user's ``config.json`` and the
:class:`~specdocs.models.DocsConfig` defaults. :func:`resolve_config` merges
them. The user file lives under ``$XDG_CONFIG_HOME/specdocs`` on Linux/BSD
and ``~/.specdocs`` elsewhere.

:func:`atomic_write` is also how the generated documents reach disk, so a
half-written ``index.html`` never replaces a good one.
"""

from __future__ import annotations

import contextlib
import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from specdocs.exceptions import ConfigError
from specdocs.models import DocsConfig

_APP_NAME = "specdocs"
_CONFIG_FILENAME = "config.json"
_PROJECT_CONFIG_FILENAME = "specdocs.json"

ENV_VARS: dict[str, str] = {
    "SPECDOCS_BASE_URL": "base_url",
    "SPECDOCS_TITLE": "title",
    "SPECDOCS_OUTPUT_DIR": "output_dir",
    "SPECDOCS_FORMAT": "format",
}
"""Environment variables read by :func:`resolve_config`, mapped to config fields."""


# --- Directories ---


def _is_xdg_platform() -> bool:
    system = platform.system()
    return system == "Linux" or system.endswith("BSD")


def _app_dir(xdg_var: str, xdg_default: str, fallback: str) -> Path:
    """Return (and create) an app directory for the current platform.

    XDG platforms use ``$<xdg_var>/specdocs`` with *xdg_default* (relative to
    ``$HOME``) when the variable is unset. Elsewhere everything lives under
    ``~/.specdocs`` with *fallback* appended.
    """
    if _is_xdg_platform():
        root = os.environ.get(xdg_var) or str(Path.home() / xdg_default)
        path = Path(root) / _APP_NAME
    else:
        path = Path.home() / f".{_APP_NAME}" / fallback
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_config_dir() -> Path:
    """``~/.config/specdocs`` on Linux/BSD, ``~/.specdocs`` elsewhere."""
    return _app_dir("XDG_CONFIG_HOME", ".config", "")


def get_data_dir() -> Path:
    """Where crash logs go: ``~/.local/share/specdocs`` or ``~/.specdocs/logs``."""
    return _app_dir("XDG_DATA_HOME", ".local/share", "logs")


# --- Atomic file writes ---


def atomic_write(path: Path, data: str) -> None:
    """Replace *path* with *data* through a sibling temp file and ``os.replace``.

    Used for the config file and every generated document. A failed write
    leaves the previous file untouched and no temp file behind.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_name)
        raise


# --- Config files ---


def global_config_path() -> Path:
    return get_config_dir() / _CONFIG_FILENAME


def _read_json_object(path: Path, label: str) -> Optional[dict[str, Any]]:
    """Parse *path* as a JSON object; ``None`` when the file is absent."""
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ConfigError(f"Invalid {label} config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid {label} config at {path}: expected a JSON object")
    return data


def load_global_config() -> DocsConfig:
    """Return the user's stored defaults, or plain defaults if none are saved.

    Raises:
        ConfigError: If ``config.json`` is unreadable or holds invalid values.
    """
    path = global_config_path()
    data = _read_json_object(path, "global")
    if data is None:
        return DocsConfig()
    try:
        return DocsConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid global config at {path}: {exc}") from exc


def save_global_config(config: DocsConfig) -> None:
    data = config.model_dump(mode="json")
    atomic_write(global_config_path(), json.dumps(data, indent=2) + "\n")


def load_project_config() -> Optional[dict[str, Any]]:
    """Return the raw ``./specdocs.json`` object, or ``None`` without one.

    Values are validated only after merging, in :func:`resolve_config`, so a
    project file may hold any subset of the fields.
    """
    return _read_json_object(Path.cwd() / _PROJECT_CONFIG_FILENAME, "project")


# --- Precedence resolution ---


def resolve_config(cli_overrides: Optional[dict[str, Any]] = None) -> DocsConfig:
    """Merge every configuration layer into the effective settings.

    ``None`` values in *cli_overrides* mean "flag not given" and never clear
    a lower layer.

    ``landing`` is merged key by key, so a project file can set
    ``{"landing": {"prompt_text": ...}}`` without resetting the other
    landing options.

    Raises:
        ConfigError: If any layer is unreadable or the merged result fails
            validation.
    """
    # Defaults overlaid by the user's config.json
    merged = load_global_config().model_dump(mode="json")

    # ./specdocs.json
    project = load_project_config()
    if project is not None:
        merged = _merge(merged, project)

    # SPECDOCS_* variables
    env_layer = {
        field: os.environ[var] for var, field in ENV_VARS.items() if os.environ.get(var)
    }
    merged = _merge(merged, env_layer)

    # Flags
    if cli_overrides:
        merged = _merge(merged, _drop_none(cli_overrides))

    try:
        return DocsConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


def _merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Return *base* updated with *overlay*, merging nested dicts."""
    result = dict(base)
    for key, value in overlay.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _merge(result[key], value)
        else:
            result[key] = value
    return result


def _drop_none(data: dict[str, Any]) -> dict[str, Any]:
    cleaned: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, dict):
            value = _drop_none(value)
            if value:
                cleaned[key] = value
        elif value is not None:
            cleaned[key] = value
    return cleaned
