"""
url2 - ergonomic wrapper around yarl.URL.

Main components:
- Url2: parsed URL value
- Url2QueryUnique: unique-key map view over the query string
- url2 / try_url2: build a Url2 from a str.format() pattern
- ParseError: raised for text that is not a valid URL

Usage example:
    from url2 import url2

    url = url2("https://{}/", "example.com")
    url.query_unique().set_pair("hello", "world")
    print(url)  # https://example.com/?hello=world
"""

from .exceptions import ParseError, Url2Error, Url2ErrorKind
from .query_unique import Url2QueryUnique
from .settings import LogLevel, Settings, settings
from .url import Url2, try_url2, url2

__all__ = [
    "Url2",
    "Url2QueryUnique",
    "Url2Error",
    "Url2ErrorKind",
    "ParseError",
    "url2",
    "try_url2",
    "LogLevel",
    "Settings",
    "settings",
]

__version__ = "0.1.0"
