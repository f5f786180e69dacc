# Copyright 2025 Softwell S.r.l.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Configuration for genro-url.

Settings are few: the synthetic "current location" used off-browser, and the
defaults of the command line tool. They are layered with genro-toolbox
SmartOptions, later sources overriding earlier ones:

    hardcoded defaults < TOML [url] table < environment variables < explicit arguments

Key constraints:
- TOML keys CANNOT contain underscore (_) as it's used as the flattening separator
- Environment variables use prefix GENRO_URL_ (e.g., GENRO_URL_LOCATION)

Example TOML structure:
    [url]
    location = "https://bookmarks.example.com/app/"
    resolve = true
    strict = false
"""

from __future__ import annotations

import os
import re
import sys
from pathlib import Path
from typing import Any

from genro_toolbox import SmartOptions  # type: ignore[import-untyped]

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found]

__all__ = [
    "ConfigError",
    "UrlSettings",
    "find_config_file",
    "get_settings",
    "load_config",
    "set_settings",
    "validate_keys",
]

DEFAULTS = {"resolve": True, "strict": False}


class ConfigError(Exception):
    """Configuration error."""


def validate_keys(data: Any, path: str = "") -> None:
    """
    Validate that no keys contain underscore.

    Args:
        data: Configuration data (dict, list, or value).
        path: Current path for error messages.

    Raises:
        ConfigError: If a key contains underscore.
    """
    if isinstance(data, dict):
        for key, value in data.items():
            full_path = f"{path}.{key}" if path else key
            if "_" in key:
                raise ConfigError(
                    f"Invalid key '{full_path}': underscore (_) is not allowed in keys. "
                    f"Use camelCase or single words instead."
                )
            validate_keys(value, full_path)
    elif isinstance(data, list):
        for i, item in enumerate(data):
            validate_keys(item, f"{path}[{i}]")


def load_config(path: str | Path) -> dict[str, Any]:
    """
    Load configuration from TOML file.

    Args:
        path: Path to TOML configuration file.

    Returns:
        Parsed configuration dict.

    Raises:
        ConfigError: If file not found, invalid TOML, or keys contain underscore.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")

    try:
        with open(path, "rb") as f:
            config = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Failed to parse TOML: {e}") from e

    validate_keys(config)
    return dict(_expand_env_vars(config))


def _expand_env_vars(obj: Any) -> Any:
    """Recursively expand ${VAR} and ${VAR:-default} in config values."""
    if isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(item) for item in obj]
    elif isinstance(obj, str):
        return _expand_string(obj)
    return obj


def _expand_string(s: str) -> str:
    """
    Expand environment variables in a string.

    Raises:
        ConfigError: If required variable is not set.
    """
    pattern = r"\$\{([^}]+)\}"

    def replace(match: re.Match[str]) -> str:
        expr = match.group(1)
        if ":-" in expr:
            var_name, default = expr.split(":-", 1)
            return os.environ.get(var_name, default)
        value = os.environ.get(expr)
        if value is None:
            raise ConfigError(f"Required environment variable not set: {expr}")
        return value

    return re.sub(pattern, replace, s)


def find_config_file() -> Path | None:
    """
    Find configuration file in standard locations.

    Searches:
    1. GENRO_URL_CONFIG environment variable
    2. ./genro-url.toml
    3. ./config/genro-url.toml
    4. ~/.config/genro-url/config.toml

    Returns:
        Path to config file or None if not found.
    """
    env_config = os.environ.get("GENRO_URL_CONFIG")
    if env_config:
        path = Path(env_config)
        if path.exists():
            return path

    locations = [
        Path.cwd() / "genro-url.toml",
        Path.cwd() / "config" / "genro-url.toml",
        Path.home() / ".config" / "genro-url" / "config.toml",
    ]

    for path in locations:
        if path.exists():
            return path

    return None


def _settings_spec(location: str, resolve: bool, strict: bool) -> None:
    """Reference function for SmartOptions type extraction (no defaults)."""


class UrlSettings:
    """Layered genro-url settings."""

    __slots__ = ("_opts",)

    def __init__(
        self,
        location: str | None = None,
        resolve: bool | None = None,
        strict: bool | None = None,
        config: str | Path | None = None,
        argv: list[str] | None = None,
    ) -> None:
        self._opts = self._build_config(
            location=location,
            resolve=resolve,
            strict=strict,
            config=config,
            argv=argv or [],
        )

    def _build_config(
        self,
        location: str | None,
        resolve: bool | None,
        strict: bool | None,
        config: str | Path | None,
        argv: list[str],
    ) -> SmartOptions:
        """Build settings from defaults, TOML file, environment and arguments.

        The TOML file is ``config`` when given, otherwise the first file found
        by ``find_config_file()``. Only its ``[url]`` table is used.
        """
        env_argv_opts = SmartOptions(_settings_spec, env="GENRO_URL", argv=argv)

        caller_opts = SmartOptions(
            dict(location=location, resolve=resolve, strict=strict),
            ignore_none=True,
        )

        config_path = Path(config) if config is not None else find_config_file()
        file_table: dict[str, Any] = {}
        if config_path is not None:
            file_table = load_config(config_path).get("url") or {}

        return (
            SmartOptions(DEFAULTS)
            + SmartOptions(file_table)
            + env_argv_opts
            + caller_opts
        )

    @property
    def location(self) -> str | None:
        """Synthetic current location, None to use the working directory."""
        value = self._opts["location"]
        return str(value) if value else None

    @property
    def resolve(self) -> bool:
        """Resolve relative references by default."""
        return bool(self._opts["resolve"])

    @property
    def strict(self) -> bool:
        """Validate references by default."""
        return bool(self._opts["strict"])

    def __repr__(self) -> str:
        return (
            f"UrlSettings(location={self.location!r}, "
            f"resolve={self.resolve!r}, strict={self.strict!r})"
        )


_settings: UrlSettings | None = None


def get_settings() -> UrlSettings:
    """Return the process settings, building them on first use."""
    global _settings
    if _settings is None:
        _settings = UrlSettings()
    return _settings


def set_settings(settings: UrlSettings | None) -> None:
    """Replace the process settings (None rebuilds them on next use)."""
    global _settings
    _settings = settings
