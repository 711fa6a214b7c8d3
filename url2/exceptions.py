"""
url2 exceptions.

Every failure raised by this package derives from Url2Error.
"""

import enum
from typing import Optional


class Url2ErrorKind(str, enum.Enum):
    """Kind of a Url2Error."""

    URL_PARSE_ERROR = "url_parse_error"
    UNKNOWN = "unknown"


class Url2Error(Exception):
    """Base exception for url2 errors."""

    kind: Url2ErrorKind = Url2ErrorKind.UNKNOWN

    def __init__(self, message: str = "", kind: Optional[Url2ErrorKind] = None):
        super().__init__(message or "Url2Error::Unknown")
        if kind is not None:
            self.kind = kind


class ParseError(Url2Error, ValueError):
    """Exception raised when text cannot be parsed into a Url2."""

    kind = Url2ErrorKind.URL_PARSE_ERROR

    def __init__(self, text: object, reason: str):
        self.text = text
        self.reason = reason
        super().__init__(f"Invalid URL {text!r}: {reason}")
