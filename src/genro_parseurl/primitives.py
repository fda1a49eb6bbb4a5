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
URL-parsing primitives used by the full parser.

Purpose
=======
The full parser needs two black boxes:

1. ``StandardURL`` - the primary primitive. A WHATWG-style object
   (``href``, ``pathname``, ``search``, ``hash``, ``host``, ``hostname``,
   ``port``, ``protocol``, ``username``, ``password``) built on ``yarl.URL``.
   Takes an optional base for relative strings. Raises ``URLParseError``
   on input yarl rejects, and on a string without a scheme when no base
   is given.
2. ``legacy_parse`` - last resort, built on ``urllib.parse.urlsplit``.
   Returns a ``ParsedURL`` directly, so no field mapping is needed.

Field Conventions (StandardURL)::

    Missing components are empty strings, never None:

    StandardURL("http://localhost:8888/foo/bar")
        protocol  "http:"
        host      "localhost:8888"
        hostname  "localhost"
        port      "8888"        ("" for the scheme's default port)
        pathname  "/foo/bar"
        search    ""            ("?x=1" when present)
        hash      ""            ("#frag" when present)
        username  ""
        password  ""

Design Notes
============
- Components are read from yarl's ``raw_*`` properties, i.e. in their
  percent-encoded form, like the WHATWG getters
- Path, query and fragment keep the escapes they arrived with: only C0
  controls, space, DEL and non-ASCII are percent-encoded (as UTF-8), so
  "100%", "%7E" and "|" pass through unchanged. The authority still goes
  through yarl's own encoding (IDNA hosts)
- IPv6 hosts keep their brackets (``yarl.URL.host_subcomponent``)
- All fields are computed in ``__init__`` so every yarl error surfaces
  there, wrapped in ``URLParseError``

References
==========
- yarl: https://yarl.aio-libs.org/
- WHATWG URL: https://url.spec.whatwg.org/
- urllib.parse: https://docs.python.org/3/library/urllib.parse.html
"""

from __future__ import annotations

from urllib.parse import urlsplit, urlunsplit

from yarl import URL

from .exceptions import URLParseError
from .parsed_url import ParsedURL

__all__ = ["StandardURL", "legacy_parse", "DEFAULT_PORTS"]

DEFAULT_PORTS = {
    "http": 80,
    "https": 443,
    "ws": 80,
    "wss": 443,
    "ftp": 21,
}

AUTHORITY_END = "/?#"


class StandardURL:
    """
    WHATWG-shaped view of a ``yarl.URL``.

    Args:
        url: The URL string.
        base: Absolute URL used to resolve ``url`` when it is relative.

    Raises:
        URLParseError: If yarl rejects the input, or if ``base`` is None
            and ``url`` has no scheme.

    Example:
        >>> u = StandardURL("/a/b?x=1#top", "http://localhost")
        >>> u.href
        'http://localhost/a/b?x=1#top'
        >>> u.search, u.hash
        ('?x=1', '#top')
    """

    __slots__ = (
        "href",
        "pathname",
        "search",
        "hash",
        "host",
        "hostname",
        "port",
        "protocol",
        "username",
        "password",
    )

    def __init__(self, url: str, base: str | None = None) -> None:
        try:
            parsed = _to_yarl(url)
            if base is not None:
                parsed = URL(base).join(parsed)
            elif not parsed.scheme:
                raise URLParseError(url, base, "no scheme and no base")
            self._load(parsed)
        except URLParseError:
            raise
        except (ValueError, TypeError) as e:
            raise URLParseError(url, base, str(e)) from e

    def _load(self, parsed: URL) -> None:
        scheme = parsed.scheme
        self.protocol = f"{scheme}:" if scheme else ""

        hostname = parsed.host_subcomponent or ""
        explicit_port = parsed.explicit_port
        if explicit_port is None or explicit_port == DEFAULT_PORTS.get(scheme):
            port = ""
        else:
            port = str(explicit_port)
        self.hostname = hostname
        self.port = port
        self.host = f"{hostname}:{port}" if port else hostname

        self.username = parsed.raw_user or ""
        self.password = parsed.raw_password or ""

        self.pathname = parsed.raw_path
        query = parsed.raw_query_string
        self.search = f"?{query}" if query else ""
        fragment = parsed.raw_fragment
        self.hash = f"#{fragment}" if fragment else ""
        self.href = str(parsed)

    def __repr__(self) -> str:
        return f"StandardURL({self.href!r})"


def legacy_parse(url: str) -> ParsedURL:
    """
    Parse ``url`` with ``urllib.parse`` straight into a ``ParsedURL``.

    Unlike the full parser, this applies no "authority only with ``://``"
    rule: whatever ``urlsplit`` reports as a netloc is used.

    Raises:
        ValueError: From ``urlsplit`` (e.g. unbalanced IPv6 brackets) or
            from reading a non-numeric / out-of-range port.

    Example:
        >>> legacy_parse("https://bob:pw@Example.com:8443/x?y=1").to_dict()["auth"]
        'bob:pw'
    """
    parts = urlsplit(url)
    netloc = parts.netloc

    protocol = f"{parts.scheme}:" if parts.scheme else None
    pathname = parts.path or ("/" if netloc else "")
    search = f"?{parts.query}" if parts.query else None
    hash = f"#{parts.fragment}" if parts.fragment else None

    host = hostname = port = auth = None
    if netloc:
        userinfo, _, host = netloc.rpartition("@")
        host = host.lower()
        hostname = parts.hostname
        port = str(parts.port) if parts.port is not None else None
        auth = userinfo or None

    return ParsedURL(
        href=urlunsplit((parts.scheme, netloc, pathname, parts.query, parts.fragment)),
        path=pathname + (search or ""),
        pathname=pathname,
        search=search,
        query=parts.query if search else None,
        hash=hash,
        host=host,
        hostname=hostname,
        port=port,
        protocol=protocol,
        auth=auth,
    )


def _percent_encode(text: str) -> str:
    """Encode C0 controls, space, DEL and non-ASCII; leave everything else."""
    out = []
    for char in text:
        if 0x20 < ord(char) < 0x7F:
            out.append(char)
        else:
            out.extend(f"%{byte:02X}" for byte in char.encode("utf-8"))
    return "".join(out)


def _to_yarl(url: str) -> URL:
    """
    Build a ``yarl.URL`` that keeps existing escapes as written.

    The authority goes through yarl's normal encoding (IDNA hosts); path,
    query and fragment are only percent-encoded where WHATWG would encode
    them, then handed to yarl as already encoded.
    """
    if "://" in url:
        authority_start = url.index("://") + 3
    elif url.startswith("//"):
        authority_start = 2
    else:
        return URL(_percent_encode(url), encoded=True)

    tail_start = len(url)
    for i in range(authority_start, len(url)):
        if url[i] in AUTHORITY_END:
            tail_start = i
            break

    head = str(URL(url[:tail_start]))
    return URL(head + _percent_encode(url[tail_start:]), encoded=True)
