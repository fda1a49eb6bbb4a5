# Copyright 2025 Softwell S.r.l.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Exception classes for genro-parseurl.

Module Structure
----------------
Two exception classes:

1. URLParseError - The standard URL primitive rejected its input
2. ConfigError - Configuration could not be loaded or validated

Design Decisions
----------------
- URLParseError subclasses ValueError, so code that already guards URL
  parsing with ``except ValueError`` keeps working.
- Neither exception escapes ``parse_current`` / ``parse_original``:
  URLParseError is recovered by the full parser's fallback chain, and
  ConfigError is raised only while settings are being loaded.

URLParseError
-------------
Attributes:
    url (str): The string that failed to parse.
    base (str | None): The base it was parsed against, if any.

Example:
    >>> try:
    ...     StandardURL("http://[::1")
    ... except URLParseError as e:
    ...     print(e.url)
    http://[::1
"""

__all__ = ["URLParseError", "ConfigError"]


class URLParseError(ValueError):
    """
    Raised when a URL string cannot be parsed by the standard primitive.

    Attributes:
        url: The input string.
        base: The base URL used for relative resolution, or None.
    """

    def __init__(self, url: str, base: str | None = None, detail: str = "") -> None:
        self.url = url
        self.base = base
        self.detail = detail
        message = f"Invalid URL: {url!r}"
        if base is not None:
            message += f" (base {base!r})"
        if detail:
            message += f": {detail}"
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(url={self.url!r}, base={self.base!r})"


class ConfigError(Exception):
    """Configuration error."""
