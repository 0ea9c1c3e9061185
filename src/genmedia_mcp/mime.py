"""MIME type inference for storage-hosted images."""

from core.errors import UnsupportedMimeTypeError


SUPPORTED_MIME_TYPES = ("image/jpeg", "image/png")

_SUFFIX_MIME_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
}


def _match_suffix(path: str) -> str:
    for suffix, mime_type in _SUFFIX_MIME_TYPES.items():
        if path.endswith(suffix):
            return mime_type
    return ""


def infer_mime_type(uri: str) -> str:
    """
    Infer a supported MIME type from a URI's file suffix.

    '#' and '?' are legal in object names, so the whole URI is matched first;
    a trailing ?query is only dropped when that finds nothing.

    Returns "" when the suffix is not recognized.
    """
    text = uri.strip().lower()
    mime_type = _match_suffix(text)
    if not mime_type and "?" in text:
        mime_type = _match_suffix(text.rsplit("?", 1)[0])
    return mime_type


def normalize_mime_type(value: str, field: str = "mime_type") -> str:
    """Lower-case and validate an explicitly supplied MIME type."""
    mime_type = value.strip().lower()
    if mime_type not in SUPPORTED_MIME_TYPES:
        raise UnsupportedMimeTypeError(field, mime_type=mime_type)
    return mime_type
