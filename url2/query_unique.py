"""
Unique-key view over a URL query string.

URL query strings allow the same key to appear several times, but most
callers treat them as a plain map. Url2QueryUnique presents the query of a
Url2 as an ordered map with unique keys:

    url = Url2.parse("https://example.com/?a=1&a=2&b=3")
    url.query_unique().set_pair("a", "9")   # -> ?a=9&b=3

Every operation decodes the current query text, applies the change and
re-encodes it into the bound Url2, so nothing is cached between calls.
"""

from collections.abc import MutableMapping
from typing import TYPE_CHECKING, Iterator, List, Optional, Tuple

from loguru import logger

if TYPE_CHECKING:
    from .url import Url2

log = logger.bind(service="url2.query_unique")

QueryPair = Tuple[str, str]


class Url2QueryUnique(MutableMapping):
    """Gives access to the query string restricting the view to unique keys."""

    __slots__ = ("_url_ref",)

    def __init__(self, url_ref: "Url2"):
        self._url_ref = url_ref

    # -- unique map operations -- #

    def set_pair(self, key: str, value: str) -> "Url2QueryUnique":
        """
        Set ``key`` to ``value``.

        An existing key keeps the position of its first occurrence. A new
        key is appended after all existing keys. Duplicate keys left in
        the query text are collapsed to their first occurrence.

        Returns the view itself, so calls can be chained:
            url.query_unique().set_pair("a", "1").set_pair("b", "2")
        """
        pairs = self._unique_pairs()
        for i, (k, _) in enumerate(pairs):
            if k == key:
                pairs[i] = (key, value)
                break
        else:
            pairs.append((key, value))

        self._encode(pairs)
        return self

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Return the decoded value of the first pair named ``key``."""
        for k, v in self._decode():
            if k == key:
                return v
        return default

    def contains_key(self, key: str) -> bool:
        return self.get(key) is not None

    def remove(self, key: str) -> "Url2QueryUnique":
        """
        Remove every pair named ``key``.

        Removing a key that is not present only collapses duplicates.
        Returns the view itself for chaining.
        """
        self._encode([(k, v) for k, v in self._unique_pairs() if k != key])
        return self

    def pairs(self) -> List[QueryPair]:
        """Decoded pairs with duplicate keys reduced to their first occurrence."""
        return _first_wins(self._decode())

    # -- mapping protocol -- #

    def __getitem__(self, key: str) -> str:
        value = self.get(key)
        if value is None:
            raise KeyError(key)
        return value

    def __setitem__(self, key: str, value: str) -> None:
        self.set_pair(key, value)

    def __delitem__(self, key: str) -> None:
        if not self.contains_key(key):
            raise KeyError(key)
        self.remove(key)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.contains_key(key)

    def __iter__(self) -> Iterator[str]:
        return iter([k for k, _ in self.pairs()])

    def __len__(self) -> int:
        return len(self.pairs())

    def clear(self) -> None:
        self._encode([])

    def __repr__(self) -> str:
        return f"Url2QueryUnique({dict(self.pairs())!r})"

    # -- private -- #

    def _decode(self) -> List[QueryPair]:
        return list(self._url_ref.url.query.items())

    def _unique_pairs(self) -> List[QueryPair]:
        decoded = self._decode()
        pairs = _first_wins(decoded)
        if len(pairs) != len(decoded):
            log.debug(
                f"Collapsed {len(decoded) - len(pairs)} duplicate query pair(s) "
                f"in {self._url_ref.to_text()!r}"
            )
        return pairs

    def _encode(self, pairs: List[QueryPair]) -> None:
        # an empty pair list drops the "?" entirely
        self._url_ref._replace_url(self._url_ref.url.with_query(pairs))


def _first_wins(pairs: List[QueryPair]) -> List[QueryPair]:
    seen = set()
    result = []
    for k, v in pairs:
        if k not in seen:
            seen.add(k)
            result.append((k, v))
    return result
