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
Exception classes for genro-url.

Parsing and serialization are permissive and never raise: malformed escapes
pass through, a missing scheme means "relative", an empty string means
"current location". The exceptions below exist only for the opt-in paths.

Module Structure
----------------
1. UrlError - Base class, catch it to handle every genro-url failure
2. InvalidURL - Raised by strict parsing and by ``remove_utm_params``

When Raised
-----------
- ``parse_url(url, strict=True)`` with a malformed percent-escape
  (``%`` not followed by two hex digits)
- ``parse_url(url, strict=True)`` with a scheme from the default-port table
  (http, https, ws, wss, ftp, gopher) but no host
- ``remove_utm_params(url)`` when the URL has no protocol or no host

Example:
    >>> try:
    ...     parse_url("http://host/100%", strict=True)
    ... except InvalidURL as e:
    ...     logger.warning(f"Rejected {e.url}: {e.detail}")
"""


class UrlError(Exception):
    """Base class for genro-url errors."""


class InvalidURL(UrlError):
    """
    A URL rejected by an opt-in validation.

    Attributes:
        url: The rejected input string.
        detail: Human readable reason.

    Example:
        >>> raise InvalidURL("http:///path", detail="missing host")
    """

    def __init__(self, url: str, detail: str = "") -> None:
        """
        Initialize validation error.

        Args:
            url: The rejected input string.
            detail: Reason for the rejection (default: "").
        """
        self.url = url
        self.detail = detail
        super().__init__(f"{detail}: {url!r}" if detail else repr(url))

    def __repr__(self) -> str:
        """Return detailed string representation."""
        return f"InvalidURL(url={self.url!r}, detail={self.detail!r})"
