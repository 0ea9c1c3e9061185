"""
Request planning for each generation operation.

    raw arguments -> resolve_parameters -> alias index -> validate -> descriptor

Nothing here calls the generation backend; callers hand the returned
ValidatedDescriptor to their client.
"""

from typing import Any, Mapping, Optional

from core.errors import UnknownOperationError

from .config import Settings, get_settings
from .mcp_utils import log_structured
from .model_registry import CapabilityRegistry, get_registry
from .params import OPERATIONS, resolve_parameters
from .types import ValidatedDescriptor
from .validation import validate_request


def plan_request(
    operation: str,
    arguments: Mapping[str, Any],
    registry: Optional[CapabilityRegistry] = None,
    settings: Optional[Settings] = None,
) -> ValidatedDescriptor:
    """
    Validate a raw request for one operation.

    Args:
        operation: One of OPERATIONS (veo_t2v, veo_i2v, veo_interpolate, imagen_t2i, gemini_generate)
        arguments: Untyped tool arguments
        registry: Capability registry; defaults to the global one
        settings: Defaults; global settings when omitted

    Returns:
        ValidatedDescriptor

    Raises:
        GenmediaValidationError: the request is rejected
    """
    spec = OPERATIONS.get(operation)
    if spec is None:
        raise UnknownOperationError(operation, list(OPERATIONS))
    registry = registry or get_registry()
    settings = settings or get_settings()

    params = resolve_parameters(spec, arguments, settings)
    descriptor = validate_request(params, registry)

    log_structured(
        "info",
        "request_validated",
        operation=descriptor.operation,
        model=descriptor.model,
        aspect_ratio=descriptor.aspect_ratio,
        output_count=descriptor.output_count,
        duration_secs=descriptor.duration_secs,
        generate_audio=descriptor.generate_audio,
        storage_uri=descriptor.storage_uri,
        reference_images=len(descriptor.reference_images),
    )
    return descriptor


def plan_veo_t2v(arguments, registry=None, settings=None) -> ValidatedDescriptor:
    """Text-to-video: prompt required."""
    return plan_request("veo_t2v", arguments, registry, settings)


def plan_veo_i2v(arguments, registry=None, settings=None) -> ValidatedDescriptor:
    """Image-to-video: image_uri required, prompt optional."""
    return plan_request("veo_i2v", arguments, registry, settings)


def plan_veo_interpolate(arguments, registry=None, settings=None) -> ValidatedDescriptor:
    """First/last frame interpolation, optionally with reference images."""
    return plan_request("veo_interpolate", arguments, registry, settings)


def plan_imagen_t2i(arguments, registry=None, settings=None) -> ValidatedDescriptor:
    return plan_request("imagen_t2i", arguments, registry, settings)


def plan_gemini_generate(arguments, registry=None, settings=None) -> ValidatedDescriptor:
    return plan_request("gemini_generate", arguments, registry, settings)
