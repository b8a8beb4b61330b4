"""Classification of ``$ref`` values by URI scheme."""

from __future__ import annotations

import re
from enum import Enum
from urllib.parse import urlparse

__all__ = [
    "RefType",
    "ReferenceError_",
    "UnsupportedRefFormatError",
    "GetRefTypeError",
    "UnsupportedRefSchemaError",
    "get_ref_type",
]


class RefType(str, Enum):
    """Where a reference points to."""

    FILE = "file"
    HTTP = "http"
    HTTPS = "https"
    UNKNOWN = "unknown"


class ReferenceError_(Exception):
    """Base class for problems with ``$ref`` values."""


class UnsupportedRefFormatError(ReferenceError_):
    """The reference is of a kind no loader handles."""

    def __init__(self, message: str = "unsupported $ref format") -> None:
        super().__init__(message)


class GetRefTypeError(ReferenceError_):
    """The type of a reference could not be determined."""


class UnsupportedRefSchemaError(GetRefTypeError):
    """The reference uses a URI scheme that is not supported."""


_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_CONTROL = re.compile(r"[\x00-\x1f\x7f]")

_SCHEMES = {
    "http": RefType.HTTP,
    "https": RefType.HTTPS,
    "file": RefType.FILE,
    "": RefType.FILE,
}


def get_ref_type(ref: str) -> RefType:
    """Return the kind of location ``ref`` names.

    Raises ``GetRefTypeError`` if the reference cannot be parsed and
    ``UnsupportedRefSchemaError`` if its scheme is not supported.
    """
    if _CONTROL.search(ref):
        raise GetRefTypeError(f"cannot get $ref type: invalid control character in {ref!r}")
    if ref.startswith(":"):
        raise GetRefTypeError(f"cannot get $ref type: missing protocol scheme in {ref!r}")
    if _BAD_ESCAPE.search(ref):
        raise GetRefTypeError(f"cannot get $ref type: invalid URL escape in {ref!r}")
    try:
        scheme = urlparse(ref).scheme.lower()
    except ValueError as exc:
        raise GetRefTypeError(f"cannot get $ref type: {exc}") from exc

    try:
        return _SCHEMES[scheme]
    except KeyError:
        raise UnsupportedRefSchemaError(
            f"cannot get $ref type: unsupported $ref schema {scheme!r}"
        ) from None