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

"""genro-parseurl - Memoized, legacy-shaped parsing of request URLs.

Main components:
    parse_current: Parse ``request.url``, cached on the request
    parse_original: Parse ``request.original_url``, falling back to ``url``
    ParsedURL: Record with href, path, pathname, search, query, hash,
        host, hostname, port, protocol and auth

Parsing:
    fast_parse: Shortcut for plain ``/path?query`` strings
    full_parse: yarl-based parser with urllib fallback; never raises
    is_fresh: Whether a cached record still matches the raw URL

Usage:
    from genro_parseurl import parse_current

    parsed = parse_current(request)
    if parsed is not None:
        print(parsed.pathname, parsed.query_params.get("page"))
"""

__version__ = "0.1.0"

from .accessors import (
    ORIGINAL_URL_CACHE_SLOT,
    ORIGINAL_URL_FIELD,
    URL_CACHE_SLOT,
    URL_FIELD,
    parse_current,
    parse_original,
    parseurl,
)
from .config import (
    ParserSettings,
    find_config_file,
    get_settings,
    load_config,
    settings_from_config,
)
from .exceptions import ConfigError, URLParseError
from .parsed_url import ParsedURL
from .parser import fast_parse, full_parse, is_fresh
from .primitives import StandardURL, legacy_parse
from .query_params import QueryParams

__all__ = [
    # Accessors
    "parse_current",
    "parse_original",
    "parseurl",
    "URL_FIELD",
    "ORIGINAL_URL_FIELD",
    "URL_CACHE_SLOT",
    "ORIGINAL_URL_CACHE_SLOT",
    # Records
    "ParsedURL",
    "QueryParams",
    # Parsers
    "fast_parse",
    "full_parse",
    "is_fresh",
    # Primitives
    "StandardURL",
    "legacy_parse",
    # Configuration
    "ParserSettings",
    "find_config_file",
    "get_settings",
    "load_config",
    "settings_from_config",
    # Exceptions
    "ConfigError",
    "URLParseError",
]
