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
Configuration for genro-parseurl.

The parser has two process-wide settings, resolved once and then treated
as constants:

    base       placeholder base used to parse relative URLs
               (default "http://localhost")
    primitive  "standard" (yarl, with urllib fallback) or "legacy"
               (urllib only)

Priority (later overrides earlier):

    hardcoded defaults < TOML file [parseurl] table < environment variables

Key constraints:
- TOML keys CANNOT contain underscore (_); use single words
- Environment variables use prefix GENRO_PARSEURL_ (GENRO_PARSEURL_BASE,
  GENRO_PARSEURL_PRIMITIVE); GENRO_PARSEURL_CONFIG points at the TOML file
- String values may reference ${VAR} or ${VAR:-default}

Example TOML::

    [parseurl]
    base = "http://placeholder.invalid"
    primitive = "standard"
"""

from __future__ import annotations

import logging
import os
import re
import sys
import tomllib
from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any

from yarl import URL

from .exceptions import ConfigError

__all__ = [
    "ParserSettings",
    "PRIMITIVES",
    "ConfigError",
    "get_settings",
    "load_config",
    "find_config_file",
    "settings_from_config",
    "validate_keys",
]

logger = logging.getLogger("genro_parseurl.config")

ENV_PREFIX = "GENRO_PARSEURL_"
PRIMITIVES = ("standard", "legacy")
DEFAULTS = {"base": "http://localhost", "primitive": "standard"}


class ParserSettings:
    """
    Immutable parser settings.

    Attributes:
        base: Absolute ``scheme://host`` URL relative inputs are resolved
            against. It never appears in a result.
        primitive: ``"standard"`` or ``"legacy"``.

    Raises:
        ConfigError: If ``base`` is not a bare absolute origin or
            ``primitive`` is unknown.
    """

    __slots__ = ("base", "primitive")

    def __init__(self, base: str = DEFAULTS["base"], primitive: str = DEFAULTS["primitive"]) -> None:
        if primitive not in PRIMITIVES:
            raise ConfigError(
                f"Unknown primitive '{primitive}'. Expected one of: {', '.join(PRIMITIVES)}"
            )
        _check_base(base)
        object.__setattr__(self, "base", base)
        object.__setattr__(self, "primitive", primitive)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{self.__class__.__name__} is immutable")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParserSettings):
            return NotImplemented
        return (self.base, self.primitive) == (other.base, other.primitive)

    def __hash__(self) -> int:
        return hash((self.base, self.primitive))

    def __repr__(self) -> str:
        return f"ParserSettings(base={self.base!r}, primitive={self.primitive!r})"


def _check_base(base: str) -> None:
    try:
        url = URL(base)
        valid = bool(url.scheme and url.raw_host) and not (
            url.raw_query_string or url.raw_fragment or url.raw_path not in ("", "/")
        )
    except ValueError:
        valid = False
    if not valid or base.endswith("/") or "://" not in base:
        raise ConfigError(
            f"Invalid base '{base}': expected an absolute origin like 'http://localhost' "
            f"(no path, query, fragment or trailing slash)"
        )


def validate_keys(data: Any, path: str = "") -> None:
    """
    Validate that no keys contain underscore.

    Raises:
        ConfigError: If a key contains underscore.
    """
    if isinstance(data, dict):
        for key, value in data.items():
            child_path = f"{path}.{key}" if path else key
            if "_" in key:
                raise ConfigError(
                    f"Invalid key '{child_path}': underscore (_) is not allowed in keys. "
                    f"Use camelCase or single words instead."
                )
            validate_keys(value, child_path)
    elif isinstance(data, list):
        for i, item in enumerate(data):
            validate_keys(item, f"{path}[{i}]")


def load_config(path: str | Path) -> dict[str, Any]:
    """
    Load configuration from TOML file.

    Args:
        path: Path to TOML configuration file.

    Returns:
        Parsed configuration dict with environment variables expanded.

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
    logger.debug("Loaded parseurl configuration from %s", path)
    return dict(_expand_env_vars(config))


def _expand_env_vars(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(item) for item in obj]
    elif isinstance(obj, str):
        return _expand_string(obj)
    return obj


def _expand_string(s: str) -> str:
    """
    Expand ${VAR} (required) and ${VAR:-default} in a string.

    Raises:
        ConfigError: If a required variable is not set.
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
    1. GENRO_PARSEURL_CONFIG environment variable
    2. ./genro-parseurl.toml
    3. ./config/genro-parseurl.toml
    4. ~/.config/genro-parseurl/config.toml

    Returns:
        Path to config file or None if not found.
    """
    env_config = os.environ.get(f"{ENV_PREFIX}CONFIG")
    if env_config:
        path = Path(env_config)
        if path.exists():
            return path

    locations = [
        Path.cwd() / "genro-parseurl.toml",
        Path.cwd() / "config" / "genro-parseurl.toml",
        Path.home() / ".config" / "genro-parseurl" / "config.toml",
    ]

    for path in locations:
        if path.exists():
            return path

    return None


def settings_from_config(
    config: dict[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
) -> ParserSettings:
    """
    Merge defaults, the ``[parseurl]`` table of ``config`` and environment.

    Args:
        config: Loaded configuration (see ``load_config``), or None.
        environ: Environment mapping, defaults to ``os.environ``.

    Raises:
        ConfigError: If ``[parseurl]`` is not a table or a value is invalid.
    """
    environ = os.environ if environ is None else environ
    section = (config or {}).get("parseurl", {})
    if not isinstance(section, dict):
        raise ConfigError("[parseurl] must be a table")
    unknown = set(section) - set(DEFAULTS)
    if unknown:
        raise ConfigError(f"Unknown [parseurl] keys: {', '.join(sorted(unknown))}")

    values = {**DEFAULTS, **section}
    for key in DEFAULTS:
        env_value = environ.get(f"{ENV_PREFIX}{key.upper()}")
        if env_value:
            values[key] = env_value
    return ParserSettings(base=str(values["base"]), primitive=str(values["primitive"]))


@lru_cache(maxsize=1)
def get_settings() -> ParserSettings:
    """
    Resolve settings once per process.

    Call ``get_settings.cache_clear()`` to force a reload.
    """
    path = find_config_file()
    config = load_config(path) if path is not None else None
    return settings_from_config(config)


if __name__ == "__main__":
    import argparse
    import json

    parser = argparse.ArgumentParser(description="Load and validate parseurl config")
    parser.add_argument("config", nargs="?", help="Config file path")
    parser.add_argument("--show", action="store_true", help="Show resolved settings")
    args = parser.parse_args()

    config_path = Path(args.config) if args.config else find_config_file()
    print(f"Loading: {config_path or '(defaults)'}")

    try:
        settings = settings_from_config(load_config(config_path) if config_path else None)
    except ConfigError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if args.show:
        print(json.dumps({"base": settings.base, "primitive": settings.primitive}, indent=2))
