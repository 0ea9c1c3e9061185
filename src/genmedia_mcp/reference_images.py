"""
Reference image parsing for interpolation requests.

The field is a JSON array of {"uri": ..., "type": "ASSET" | "STYLE"} objects.
Bad entries are dropped one by one with a warning; only a field that is not
valid JSON (or not an array of objects) rejects the request.
"""

import json
from typing import List

from core.errors import MalformedInputError

from .mcp_utils import log_structured
from .mime import infer_mime_type
from .model_registry import ModelCapability
from .params import STORAGE_SCHEME
from .types import ImageRef, ReferenceType


FIELD = "reference_images"


def _skip(reason: str, **fields) -> None:
    log_structured("warning", "reference_image_skipped", reason=reason, **fields)


def parse_reference_images(raw: str, capability: ModelCapability) -> List[ImageRef]:
    """
    Parse reference images, keeping only entries the model can use.

    Args:
        raw: JSON text of the reference_images field
        capability: Resolved model; its reference_types decide accepted roles

    Returns:
        Valid entries in input order

    Raises:
        MalformedInputError: if raw is not a JSON array of objects
    """
    if not raw.strip():
        return []
    try:
        entries = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MalformedInputError(FIELD, str(e)) from e
    if not isinstance(entries, list):
        raise MalformedInputError(FIELD, f"expected an array, got {type(entries).__name__}")

    refs: List[ImageRef] = []
    for position, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise MalformedInputError(FIELD, f"entry {position} is not an object")

        uri = entry.get("uri")
        uri = uri.strip() if isinstance(uri, str) else ""
        if not uri.startswith(STORAGE_SCHEME):
            _skip("invalid_uri", position=position, uri=uri)
            continue

        mime_type = infer_mime_type(uri)
        if not mime_type:
            _skip("unknown_mime_type", position=position, uri=uri)
            continue

        raw_type = entry.get("type")
        type_name = raw_type.strip().upper() if isinstance(raw_type, str) else ""
        try:
            role = ReferenceType(type_name)
        except ValueError:
            _skip("invalid_type", position=position, uri=uri, type=raw_type)
            continue
        if role.value not in capability.reference_types:
            _skip(
                "type_not_supported_by_model",
                position=position,
                uri=uri,
                type=role.value,
                model=capability.canonical_name,
            )
            continue

        refs.append(ImageRef(uri=uri, mime_type=mime_type, role=role))
    return refs
