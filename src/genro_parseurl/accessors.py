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
Memoized URL parsing for request objects.

Purpose
=======
Middleware often asks "what is the parsed URL of this request?" many
times per request. ``parse_current`` and ``parse_original`` parse once
and keep the result in a cache slot on the request itself, re-parsing
only when the raw string has changed.

Request Shapes::

    attribute object                 mapping (dict, scope-like)
    ────────────────                 ──────────────────────────
    request.url                      request["url"]
    request.original_url             request["original_url"]
    request._parsed_url              request["_parsed_url"]
    request._parsed_original_url     request["_parsed_original_url"]

The cache slots are the only thing written; ``url`` and ``original_url``
are never modified.

Cache Slot States::

    absent ──parse──► cached(record, _raw == url)
                           │  url unchanged → same record returned
                           └─ url changed  → new record replaces it

Example::

    from genro_parseurl import parse_current, parse_original

    request.url = "/search?q=1"
    parsed = parse_current(request)
    parsed.pathname                        # "/search"
    parse_current(request) is parsed       # True

    request.original_url = "/app/search?q=1"
    parse_original(request).pathname       # "/app/search"

Design Notes
============
- A request with no ``url`` gives None and no slot is created
- A non-string ``original_url`` falls back to ``parse_current``, which
  uses the ``_parsed_url`` slot
- Objects that refuse new attributes (``__slots__`` without the cache
  slot) still get a parse result; it is just not cached
- Not locked: two threads parsing the same uncached URL may both parse
  it, and the last write wins. Both records are equal
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping
from typing import Any

from .parsed_url import ParsedURL
from .parser import fast_parse, is_fresh

__all__ = [
    "parse_current",
    "parse_original",
    "parseurl",
    "URL_FIELD",
    "ORIGINAL_URL_FIELD",
    "URL_CACHE_SLOT",
    "ORIGINAL_URL_CACHE_SLOT",
]

logger = logging.getLogger("genro_parseurl")

URL_FIELD = "url"
ORIGINAL_URL_FIELD = "original_url"
URL_CACHE_SLOT = "_parsed_url"
ORIGINAL_URL_CACHE_SLOT = "_parsed_original_url"


def parse_current(request: Any) -> ParsedURL | None:
    """
    Parse ``request.url`` with memoization.

    Args:
        request: Attribute object or mutable mapping carrying ``url``.

    Returns:
        The cached or freshly parsed record, or None if ``url`` is missing.
    """
    url = _read(request, URL_FIELD)
    if url is None:
        return None
    return _memoized(request, url, URL_CACHE_SLOT)


def parse_original(request: Any) -> ParsedURL | None:
    """
    Parse ``request.original_url`` with memoization.

    Falls back to ``parse_current(request)`` when ``original_url`` is not
    a string.
    """
    url = _read(request, ORIGINAL_URL_FIELD)
    if not isinstance(url, str):
        return parse_current(request)
    return _memoized(request, url, ORIGINAL_URL_CACHE_SLOT)


parseurl = parse_current


def _memoized(request: Any, url: Any, slot: str) -> ParsedURL:
    cached = _read(request, slot)
    if is_fresh(url, cached):
        return cached

    parsed = fast_parse(url)
    parsed._raw = url
    _write(request, slot, parsed)
    return parsed


def _read(request: Any, name: str) -> Any:
    if isinstance(request, MutableMapping):
        return request.get(name)
    return getattr(request, name, None)


def _write(request: Any, name: str, value: ParsedURL) -> None:
    if isinstance(request, MutableMapping):
        request[name] = value
        return
    try:
        setattr(request, name, value)
    except AttributeError:
        logger.debug("%s does not accept %s; parse result not cached", type(request).__name__, name)
