"""
Url2: ergonomic wrapper around yarl.URL.

Example:
    url = url2("https://{}/", "example.com")
    url.query_unique().set_pair("hello", "world").set_pair("foo", "bar")

    url.query_unique_contains_key("hello")   # True
    url.query_unique_get("foo")              # "bar"

    url.query_unique().remove("foo")
    url.to_text()                            # "https://example.com/?hello=world"
"""

import functools
import re
from typing import Any, Optional

from loguru import logger
from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema
from yarl import URL

from .exceptions import ParseError
from .query_unique import Url2QueryUnique
from .settings import settings

log = logger.bind(service="url2")

# RFC 3986: scheme = ALPHA *( ALPHA / DIGIT / "+" / "-" / "." )
_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")
_BAD_PERCENT_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")
# never valid in serialized URL text
_BAD_CHAR_RE = re.compile(r"[\x00-\x20\x7f]")


def _parse_error(text: object, reason: str) -> ParseError:
    log.debug(f"Rejected URL {text!r}: {reason}")
    return ParseError(text, reason)


def _validated(url: URL, text: str) -> URL:
    """
    Check a yarl.URL built from text and return it unchanged.

    Raises:
        ParseError: if url is not a valid absolute URL, or if its
            serialized form would not parse back to itself
    """
    if settings.strict_percent_encoding and _BAD_PERCENT_RE.search(text):
        raise _parse_error(text, "invalid percent-encoding")
    if not _SCHEME_RE.match(url.scheme):
        if not url.scheme:
            raise _parse_error(text, "relative URL without a base")
        raise _parse_error(text, f"invalid scheme {url.scheme!r}")
    try:
        # yarl may defer port and host validation until first access
        url.explicit_port
        url.host
    except ValueError as e:
        raise _parse_error(text, str(e)) from e

    serialized = str(url)
    if _BAD_CHAR_RE.search(serialized):
        raise _parse_error(text, "whitespace or control character in URL")
    if _BAD_PERCENT_RE.search(serialized):
        raise _parse_error(text, "invalid percent-encoding")
    return url


@functools.total_ordering
class Url2:
    """
    A parsed, always-valid URL.

    Instances are created with Url2.parse() (or the url2() helper), never
    from a failed parse. The wrapped yarl.URL is immutable, so mutations
    made through query_unique() swap in a new yarl.URL.
    """

    __slots__ = ("_url",)

    def __init__(self, url: URL):
        """
        Wrap an existing yarl.URL, applying the same checks as parse().

        Raises:
            ParseError: if url is not a yarl.URL or not a valid absolute URL
        """
        if not isinstance(url, URL):
            raise _parse_error(url, f"expected yarl.URL, got {type(url).__name__}")
        self._url = _validated(url, str(url))

    # -- construction -- #

    @classmethod
    def parse(cls, text: str) -> "Url2":
        """
        Parse text into a Url2.

        Args:
            text: absolute URL text, e.g. "https://example.com/?a=1"

        Returns:
            Url2: the parsed URL

        Raises:
            ParseError: if text is not a valid absolute URL
        """
        if not isinstance(text, str):
            raise _parse_error(text, f"expected str, got {type(text).__name__}")

        try:
            url = URL(text)
        except (TypeError, ValueError) as e:
            raise _parse_error(text, str(e)) from e

        return cls._wrap(_validated(url, text))

    @classmethod
    def try_parse(cls, text: str) -> "Url2":
        """Same as parse(); raises ParseError on invalid input."""
        return cls.parse(text)

    @classmethod
    def from_url(cls, url: URL) -> "Url2":
        """Wrap an existing yarl.URL, applying the same checks as parse()."""
        return cls(url)

    @classmethod
    def default(cls) -> "Url2":
        return cls.parse(settings.default_url)

    @classmethod
    def _wrap(cls, url: URL) -> "Url2":
        # url must already have passed _validated()
        obj = cls.__new__(cls)
        obj._url = url
        return obj

    # -- serialization -- #

    def to_text(self) -> str:
        return str(self._url)

    def into_string(self) -> str:
        return self.to_text()

    def copy(self) -> "Url2":
        return self._wrap(self._url)

    # -- components -- #

    @property
    def url(self) -> URL:
        """The underlying yarl.URL."""
        return self._url

    @property
    def scheme(self) -> str:
        return self._url.scheme

    @property
    def host(self) -> Optional[str]:
        return self._url.host

    @property
    def port(self) -> Optional[int]:
        """Port given in the URL text, None when omitted."""
        return self._url.explicit_port

    @property
    def path(self) -> str:
        return self._url.path

    @property
    def query_string(self) -> str:
        """Encoded query text, empty when the URL has no query."""
        return self._url.raw_query_string

    @property
    def fragment(self) -> str:
        return self._url.fragment

    # -- unique query -- #

    def query_unique(self) -> Url2QueryUnique:
        """
        Access query string entries as a unique key map.

        Url query strings support multiple instances of the same key.
        However, many common use-cases treat the query string keys as
        unique entries in a map, and this view presents them that way.

        Example:
            url = Url2.default()
            url.query_unique().set_pair("a", "1").set_pair("a", "2")
            url.to_text()  # "none:?a=2"
        """
        return Url2QueryUnique(self)

    def query_unique_contains_key(self, key: str) -> bool:
        """When parsed as a unique map, does the query string contain key?"""
        return self.query_unique().contains_key(key)

    def query_unique_get(self, key: str) -> Optional[str]:
        """When parsed as a unique map, get the value for key."""
        return self.query_unique().get(key)

    def _replace_url(self, url: URL) -> None:
        self._url = url

    # -- comparison -- #

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Url2):
            return self._url == other._url
        if isinstance(other, URL):
            return self._url == other
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, (Url2, URL)):
            return str(self) < str(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._url)

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        return f"Url2(url={self.to_text()!r})"

    # -- pydantic -- #

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source_type: Any,
        handler: GetCoreSchemaHandler,
    ) -> core_schema.CoreSchema:
        """Validate str, yarl.URL or Url2 input and serialize back to text."""
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda x: x.to_text(),
            ),
        )

    @classmethod
    def _validate(cls, value: Any) -> "Url2":
        if isinstance(value, Url2):
            return value
        if isinstance(value, URL):
            return cls.from_url(value)
        if isinstance(value, str):
            return cls.parse(value)
        raise ValueError(f"Invalid type for Url2: {type(value)}")

    @classmethod
    def __get_pydantic_json_schema__(
        cls,
        core_schema: core_schema.CoreSchema,
        handler: GetJsonSchemaHandler,
    ) -> JsonSchemaValue:
        return {
            "type": "string",
            "format": "uri",
            "example": "https://example.com/?hello=world",
        }


def url2(pattern: str, *args: Any, **kwargs: Any) -> Url2:
    """Works like str.format(), but passes the result through Url2.parse()."""
    return Url2.parse(pattern.format(*args, **kwargs))


def try_url2(pattern: str, *args: Any, **kwargs: Any) -> Url2:
    """Works like str.format(), but passes the result through Url2.try_parse()."""
    return Url2.try_parse(pattern.format(*args, **kwargs))
