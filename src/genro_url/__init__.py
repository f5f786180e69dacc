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

"""genro-url - URL value type for navigation and state restoration.

Main components:
    Url: Parsed URL with editable components and query multi-map
    parse_url: Parse (and optionally resolve) a reference
    QueryString: Ordered query string multi-map
    encode_component / decode_component: Percent-encoding primitives

Location:
    StaticLocation, CwdLocation: Current location providers
    set_location_provider, use_location: Install a provider

Usage:
    from genro_url import parse_url

    url = parse_url("/bookmarks?tag=go&tag=py", base="https://example.com/")
    url.query["page"] = "2"
    str(url)  # "https://example.com/bookmarks?tag=go&tag=py&page=2"
"""

__version__ = "0.1.0"

from .codec import decode_component, encode_component
from .config import ConfigError, UrlSettings
from .exceptions import InvalidURL, UrlError
from .location import (
    CwdLocation,
    StaticLocation,
    current_location,
    set_location_provider,
    use_location,
)
from .query_string import QueryString
from .resolver import DEFAULT_PORTS
from .url import Url, parse_url, remove_utm_params

__all__ = [
    "ConfigError",
    "CwdLocation",
    "DEFAULT_PORTS",
    "InvalidURL",
    "QueryString",
    "StaticLocation",
    "Url",
    "UrlError",
    "UrlSettings",
    "current_location",
    "decode_component",
    "encode_component",
    "parse_url",
    "remove_utm_params",
    "set_location_provider",
    "use_location",
]
