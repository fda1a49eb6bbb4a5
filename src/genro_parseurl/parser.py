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
Two-tier URL parsing and the freshness check.

Pipeline::

    fast_parse(str)
        │  starts with "/" and has no whitespace, "#", NBSP or BOM?
        ├── yes → split once on the first "?" → ParsedURL
        └── no  → full_parse(str)
                     │  strip(), then
                     ├── StandardURL (yarl), relative inputs joined to the
                     │   placeholder base; their href is the trimmed input
                     ├── legacy_parse (urllib.parse) if that raised
                     └── ParsedURL.minimal(str) if that raised too

    is_fresh(raw, cached) → cached is a ParsedURL tagged with exactly raw

Neither parser raises. Only ``full_parse`` trims whitespace, which is
why the fast path gives up on any whitespace character.
"""

from __future__ import annotations

import logging
from typing import Any

from .config import ParserSettings, get_settings
from .exceptions import URLParseError
from .parsed_url import ParsedURL
from .primitives import StandardURL, legacy_parse

__all__ = ["fast_parse", "full_parse", "is_fresh", "FAST_PATH_STOP_CHARS"]

logger = logging.getLogger("genro_parseurl.parser")

# \t \n \f \r space # NBSP BOM
FAST_PATH_STOP_CHARS = frozenset("\t\n\f\r #\u00a0\ufeff")

SCHEME_SEPARATOR = "://"


def is_fresh(raw: str, cached: Any) -> bool:
    """
    Return True if ``cached`` is a parse of exactly ``raw``.

    Any value is accepted for ``cached``; None or a non-record is simply
    not fresh.
    """
    return isinstance(cached, ParsedURL) and cached._raw == raw


def fast_parse(url: Any, settings: ParserSettings | None = None) -> ParsedURL:
    """
    Parse a plain ``/path?query`` string without the full parser.

    Anything that does not start with ``/``, or that contains whitespace,
    ``#``, NBSP or BOM, goes to ``full_parse`` unchanged.

    Example:
        >>> fast_parse("/foo?a=1?b").query
        'a=1?b'
    """
    if not isinstance(url, str) or not url.startswith("/"):
        return full_parse(url, settings)

    pathname = url
    search = query = None

    for i in range(1, len(url)):
        char = url[i]
        if char in FAST_PATH_STOP_CHARS:
            return full_parse(url, settings)
        if char == "?" and search is None:
            pathname = url[:i]
            search = url[i:]
            query = url[i + 1 :]

    return ParsedURL(
        href=url,
        path=url,
        pathname=pathname,
        search=search,
        query=query,
    )


def full_parse(url: Any, settings: ParserSettings | None = None) -> ParsedURL:
    """
    Parse any string into a ``ParsedURL``.

    Relative strings (leading ``/`` or no ``://``) are resolved against the
    placeholder base; their ``href`` is the trimmed input itself (``"/"``
    for an empty string). Authority fields are only filled for absolute URLs written with ``://``.

    Never raises: a non-string gives an empty record, and a string no
    primitive accepts gives ``ParsedURL.minimal``.

    Example:
        >>> full_parse("  /a/b#top ").href
        '/a/b#top'
        >>> full_parse("//todo@txt").host is None
        True
    """
    if not isinstance(url, str):
        return ParsedURL()

    settings = settings or get_settings()
    url = url.strip()

    if settings.primitive == "standard":
        try:
            return _from_standard(url, settings.base)
        except URLParseError as e:
            logger.debug("Standard URL parse failed, trying legacy parser: %s", e)

    try:
        return legacy_parse(url)
    except ValueError as e:
        logger.debug("Legacy URL parse failed for %r: %s", url, e)

    return ParsedURL.minimal(url)


def _from_standard(url: str, base: str) -> ParsedURL:
    has_separator = SCHEME_SEPARATOR in url
    relative = url.startswith("/") or not has_separator
    parsed = StandardURL(url, base) if relative else StandardURL(url)

    href = (url or "/") if relative else parsed.href

    search = parsed.search or None
    result = ParsedURL(
        href=href,
        path=parsed.pathname + parsed.search,
        pathname=parsed.pathname,
        search=search,
        query=search[1:] if search else None,
        hash=parsed.hash or None,
    )

    if parsed.protocol and has_separator:
        result.protocol = parsed.protocol
        result.host = parsed.host
        result.hostname = parsed.hostname
        result.port = parsed.port or None
        if parsed.password:
            result.auth = f"{parsed.username}:{parsed.password}"
        elif parsed.username:
            result.auth = parsed.username

    return result
