"""
Parameter Resolver

Typed extraction from the untyped argument mapping a tool call delivers.
Everything downstream works on RequestParameters and never looks at the raw
mapping again.

Range checks against the model (counts, durations, ratios) are not done here;
see validation.py.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from core.errors import InvalidParameterError, InvalidUriError, MissingParameterError, UnsupportedMimeTypeError

from .config import Settings
from .mime import infer_mime_type, normalize_mime_type
from .types import ImageRef


STORAGE_SCHEME = "gs://"

_TRUE_STRINGS = {"true", "1", "yes", "on"}
_FALSE_STRINGS = {"false", "0", "no", "off"}


# =============================================================================
# Operation Definitions
# =============================================================================


@dataclass(frozen=True)
class OperationSpec:
    """Which parameters an operation reads and which of them are required."""

    name: str
    family: str
    prompt_required: bool = True
    count_field: Optional[str] = None
    storage_suffix: str = ""
    storage_required: bool = False
    uses_duration: bool = False
    image_field: Optional[str] = None
    image_mime_field: Optional[str] = None
    last_frame_field: Optional[str] = None
    last_frame_mime_field: Optional[str] = None
    accepts_references: bool = False
    accepts_image_size: bool = False


OPERATIONS: Dict[str, OperationSpec] = {
    "veo_t2v": OperationSpec(
        name="veo_t2v",
        family="veo",
        count_field="num_videos",
        storage_suffix="veo_outputs",
        storage_required=True,
        uses_duration=True,
    ),
    "veo_i2v": OperationSpec(
        name="veo_i2v",
        family="veo",
        prompt_required=False,
        count_field="num_videos",
        storage_suffix="veo_outputs",
        storage_required=True,
        uses_duration=True,
        image_field="image_uri",
        image_mime_field="mime_type",
    ),
    "veo_interpolate": OperationSpec(
        name="veo_interpolate",
        family="veo",
        prompt_required=False,
        count_field="num_videos",
        storage_suffix="veo_outputs",
        storage_required=True,
        uses_duration=True,
        image_field="first_frame_uri",
        image_mime_field="first_frame_mime_type",
        last_frame_field="last_frame_uri",
        last_frame_mime_field="last_frame_mime_type",
        accepts_references=True,
    ),
    "imagen_t2i": OperationSpec(
        name="imagen_t2i",
        family="imagen",
        count_field="num_images",
        storage_suffix="imagen_outputs",
        accepts_image_size=True,
    ),
    "gemini_generate": OperationSpec(
        name="gemini_generate",
        family="gemini",
        storage_suffix="gemini_outputs",
    ),
}


@dataclass(frozen=True)
class RequestParameters:
    """Resolved, typed parameters for one request (not yet checked against the model)."""

    operation: str
    family: str
    model: str
    prompt: str = ""
    storage_uri: str = ""
    output_directory: str = ""
    aspect_ratio: str = ""
    output_count: Optional[int] = None
    count_field: str = ""
    duration: Optional[int] = None
    image_size: str = ""
    generate_audio: bool = False
    image: Optional[ImageRef] = None
    last_frame: Optional[ImageRef] = None
    reference_images_json: str = ""


# =============================================================================
# Typed Extraction
# =============================================================================


def get_string(arguments: Mapping[str, Any], name: str) -> str:
    """Trimmed string value; "" when absent, None or blank."""
    value = arguments.get(name)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise InvalidParameterError(name, "a string", value)
    return value.strip()


def require_string(arguments: Mapping[str, Any], name: str, hint: str = "") -> str:
    value = get_string(arguments, name)
    if not value:
        raise MissingParameterError(name, hint)
    return value


def get_int(arguments: Mapping[str, Any], name: str, default: Optional[int] = None) -> Optional[int]:
    """
    Integer value with JSON-friendly coercion.

    JSON numbers often arrive as floats (8.0); integral floats and decimal
    strings are accepted. Booleans and fractional values are not.
    """
    value = arguments.get(name)
    if value is None:
        return default
    if isinstance(value, bool):
        raise InvalidParameterError(name, "an integer", value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise InvalidParameterError(name, "an integer", value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return default
        try:
            return int(text)
        except ValueError:
            raise InvalidParameterError(name, "an integer", value) from None
    raise InvalidParameterError(name, "an integer", value)


def get_bool(arguments: Mapping[str, Any], name: str, default: bool = False) -> bool:
    value = arguments.get(name)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if not text:
            return default
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    raise InvalidParameterError(name, "a boolean", value)


def get_structured(arguments: Mapping[str, Any], name: str) -> str:
    """JSON text for a structured field; already-decoded lists are re-encoded."""
    value = arguments.get(name)
    if isinstance(value, (list, dict)):
        return json.dumps(value)
    return get_string(arguments, name)


def resolve_storage_uri(bucket: str, default_bucket: str, suffix: str) -> str:
    """
    Explicit bucket, else gs://<default_bucket>/<suffix>/, else "".

    A bucket given without a scheme gets gs:// prepended.
    """
    if bucket:
        return bucket if bucket.startswith(STORAGE_SCHEME) else STORAGE_SCHEME + bucket
    default_bucket = default_bucket.strip()
    if not default_bucket:
        return ""
    if default_bucket.startswith(STORAGE_SCHEME):
        default_bucket = default_bucket[len(STORAGE_SCHEME):]
    default_bucket = default_bucket.rstrip("/")
    if suffix:
        return f"{STORAGE_SCHEME}{default_bucket}/{suffix}/"
    return f"{STORAGE_SCHEME}{default_bucket}/"


def resolve_image(arguments: Mapping[str, Any], uri_field: str, mime_field: str) -> ImageRef:
    """
    Required storage-hosted image with an explicit or inferred MIME type.

    Raises:
        MissingParameterError, InvalidUriError, UnsupportedMimeTypeError
    """
    uri = require_string(arguments, uri_field, "(GCS URI)")
    if not uri.startswith(STORAGE_SCHEME):
        raise InvalidUriError(uri_field, uri, STORAGE_SCHEME)

    explicit = get_string(arguments, mime_field)
    if explicit:
        mime_type = normalize_mime_type(explicit, mime_field)
    else:
        mime_type = infer_mime_type(uri)
        if not mime_type:
            raise UnsupportedMimeTypeError(mime_field, uri=uri)
    return ImageRef(uri=uri, mime_type=mime_type)


# =============================================================================
# Resolver
# =============================================================================


def resolve_parameters(
    operation: OperationSpec,
    arguments: Mapping[str, Any],
    settings: Settings,
) -> RequestParameters:
    """
    Extract and default every parameter the operation reads.

    Args:
        operation: Operation definition from OPERATIONS
        arguments: Raw tool arguments
        settings: Process-wide defaults

    Returns:
        RequestParameters with the model still as given (name or alias)

    Raises:
        GenmediaValidationError subclasses for missing or mistyped values
    """
    if operation.prompt_required:
        prompt = require_string(arguments, "prompt", f"for {operation.name}")
    else:
        prompt = get_string(arguments, "prompt")

    image = None
    if operation.image_field:
        image = resolve_image(arguments, operation.image_field, operation.image_mime_field or "mime_type")
    last_frame = None
    if operation.last_frame_field:
        last_frame = resolve_image(
            arguments, operation.last_frame_field, operation.last_frame_mime_field or "mime_type"
        )

    storage_uri = resolve_storage_uri(get_string(arguments, "bucket"), settings.bucket, operation.storage_suffix)
    if operation.storage_required and not storage_uri:
        raise MissingParameterError(
            "bucket",
            "(no default bucket is configured; set GENMEDIA_BUCKET or pass 'bucket')",
        )

    model = get_string(arguments, "model") or settings.default_model(operation.family)

    if operation.family == "veo":
        aspect_ratio = get_string(arguments, "aspect_ratio") or settings.default_video_aspect_ratio
    elif operation.family == "imagen":
        aspect_ratio = get_string(arguments, "aspect_ratio") or settings.default_image_aspect_ratio
    else:
        aspect_ratio = ""

    output_count = None
    if operation.count_field:
        output_count = get_int(arguments, operation.count_field, settings.default_count)

    duration = None
    generate_audio = False
    if operation.uses_duration:
        duration = get_int(arguments, "duration", settings.default_duration)
        generate_audio = get_bool(arguments, "generate_audio")

    return RequestParameters(
        operation=operation.name,
        family=operation.family,
        model=model,
        prompt=prompt,
        storage_uri=storage_uri,
        output_directory=get_string(arguments, "output_directory"),
        aspect_ratio=aspect_ratio,
        output_count=output_count,
        count_field=operation.count_field or "",
        duration=duration,
        image_size=get_string(arguments, "image_size") if operation.accepts_image_size else "",
        generate_audio=generate_audio,
        image=image,
        last_frame=last_frame,
        reference_images_json=get_structured(arguments, "reference_images") if operation.accepts_references else "",
    )
