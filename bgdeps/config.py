"""Settings loading and JSON preprocessing utilities."""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from .package_managers import PackageManager
from .paths import get_config_path

PACKAGE_MANAGER_ENV = "BGDEPS_PACKAGE_MANAGER"
TIMEOUT_ENV = "BGDEPS_TIMEOUT"


class ConfigError(Exception):
    """Raised when settings loading or parsing fails.

    Syntax errors carry the line and column plus a caret line.
    """
    pass


@dataclass
class Settings:
    """User settings; every field is optional in the config file."""
    package_manager: PackageManager | None = None
    timeout: float | None = None
    hide_spinner: bool = False
    staging_root: Path | None = None

    def __post_init__(self):
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be a positive number of seconds")


def preprocess_jsonish(text: str) -> str:
    """Turn JSON-ish text into strict JSON.

    ``//`` line comments and trailing commas before ``]`` or ``}`` are
    replaced with spaces so line/column positions in errors still match the
    original text. String contents (including escaped quotes) are untouched.
    """
    out = list(text)
    n = len(text)
    i = 0
    in_string = False

    while i < n:
        char = text[i]
        if in_string:
            if char == "\\":
                i += 2
                continue
            if char == '"':
                in_string = False
            i += 1
        elif char == '"':
            in_string = True
            i += 1
        elif char == "/" and i + 1 < n and text[i + 1] == "/":
            while i < n and text[i] != "\n":
                out[i] = " "
                i += 1
        elif char == ",":
            j = i + 1
            while j < n:
                if text[j] in " \t\r\n":
                    j += 1
                elif text.startswith("//", j):
                    while j < n and text[j] != "\n":
                        j += 1
                else:
                    break
            if j < n and text[j] in "]}":
                out[i] = " "
            i += 1
        else:
            i += 1

    return "".join(out)


def _format_syntax_error(original_text: str, error: json.JSONDecodeError) -> str:
    lines = original_text.split("\n")
    msg_parts = [
        f"Config syntax error at line {error.lineno}, col {error.colno}: {error.msg}"
    ]
    if 1 <= error.lineno <= len(lines):
        msg_parts.append(lines[error.lineno - 1])
        msg_parts.append(" " * (error.colno - 1) + "^")
    return "\n".join(msg_parts)


def validate_settings(data: dict) -> Settings:
    """Validate a raw dict and convert it to Settings.

    Raises:
        ConfigError: If a field has the wrong type or value
    """
    if not isinstance(data, dict):
        raise ConfigError(f"Config must be a JSON object, got {type(data).__name__}")

    unknown = sorted(set(data) - {"package_manager", "timeout", "hide_spinner", "staging_root"})
    if unknown:
        raise ConfigError(f"Unknown config field(s): {', '.join(unknown)}")

    package_manager = data.get("package_manager")
    if package_manager is not None:
        if not isinstance(package_manager, str):
            raise ConfigError(
                f"package_manager must be a string, got {type(package_manager).__name__}"
            )
        try:
            package_manager = PackageManager.parse(package_manager)
        except ValueError as e:
            raise ConfigError(str(e))

    timeout = data.get("timeout")
    if timeout is not None and (
        isinstance(timeout, bool) or not isinstance(timeout, (int, float))
    ):
        raise ConfigError(f"timeout must be a number, got {type(timeout).__name__}")

    hide_spinner = data.get("hide_spinner", False)
    if not isinstance(hide_spinner, bool):
        raise ConfigError(
            f"hide_spinner must be a boolean, got {type(hide_spinner).__name__}"
        )

    staging_root = data.get("staging_root")
    if staging_root is not None and not isinstance(staging_root, str):
        raise ConfigError(
            f"staging_root must be a string, got {type(staging_root).__name__}"
        )

    try:
        return Settings(
            package_manager=package_manager,
            timeout=timeout,
            hide_spinner=hide_spinner,
            staging_root=Path(staging_root).expanduser() if staging_root else None,
        )
    except ValueError as e:
        raise ConfigError(str(e))


def apply_env_overrides(
    settings: Settings, environ: Mapping[str, str] | None = None
) -> Settings:
    env = os.environ if environ is None else environ

    if env.get(PACKAGE_MANAGER_ENV):
        try:
            settings.package_manager = PackageManager.parse(env[PACKAGE_MANAGER_ENV])
        except ValueError as e:
            raise ConfigError(f"{PACKAGE_MANAGER_ENV}: {e}")

    if env.get(TIMEOUT_ENV):
        try:
            timeout = float(env[TIMEOUT_ENV])
        except ValueError:
            raise ConfigError(f"{TIMEOUT_ENV} must be a number, got '{env[TIMEOUT_ENV]}'")
        if timeout <= 0:
            raise ConfigError(f"{TIMEOUT_ENV} must be a positive number of seconds")
        settings.timeout = timeout

    return settings


def load_settings(
    path: Path | None = None, environ: Mapping[str, str] | None = None
) -> Settings:
    """Load settings from the user config file plus environment overrides.

    A missing file yields defaults. The file may be JSON-ish: trailing
    commas and // line comments are tolerated.

    Raises:
        ConfigError: If the file cannot be read, parsed or validated
    """
    file_path = path if path is not None else get_config_path()

    try:
        original_text = file_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return apply_env_overrides(Settings(), environ)
    except PermissionError:
        raise ConfigError(f"Permission denied reading config file: {file_path}")
    except UnicodeDecodeError:
        raise ConfigError(f"Config file is not valid UTF-8: {file_path}")
    except OSError as e:
        raise ConfigError(f"Error reading config file {file_path}: {e}")

    try:
        data = json.loads(preprocess_jsonish(original_text))
    except json.JSONDecodeError as e:
        raise ConfigError(_format_syntax_error(original_text, e)) from e

    return apply_env_overrides(validate_settings(data), environ)


__all__ = [
    "ConfigError",
    "Settings",
    "preprocess_jsonish",
    "validate_settings",
    "apply_env_overrides",
    "load_settings",
]
