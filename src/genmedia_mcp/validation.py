"""
Constraint Validation

Cross-checks resolved request parameters against the resolved model's
capability descriptor. Checks run in a fixed order and stop at the first
failure:

1. model exists in the registry
2. aspect ratio is supported
3. duration (models with durations) or image size (models with sizes)
4. output count within [1, max_outputs]
5. feature gates: audio, last frame, reference images

Reference images are parsed only after every check above has passed.
"""

from dataclasses import replace
from typing import Optional

from core.errors import (
    OutputCountError,
    UnsupportedFeatureError,
    UnsupportedModelError,
    UnsupportedValueError,
)

from .model_registry import CapabilityRegistry, ModelCapability
from .params import RequestParameters
from .reference_images import parse_reference_images
from .types import ValidatedDescriptor


def check_model(params: RequestParameters, registry: CapabilityRegistry) -> ModelCapability:
    capability = registry.lookup(params.family, params.model)
    if capability is None:
        raise UnsupportedModelError(params.model, params.family, registry.list_names(params.family))
    return capability


def check_aspect_ratio(params: RequestParameters, capability: ModelCapability) -> None:
    if not capability.aspect_ratios:
        return
    if params.aspect_ratio not in capability.aspect_ratios:
        raise UnsupportedValueError(
            "aspect_ratio", params.aspect_ratio, capability.canonical_name, list(capability.aspect_ratios)
        )


def resolve_duration(params: RequestParameters, capability: ModelCapability) -> Optional[int]:
    """Requested (or model default) duration, checked against the supported set."""
    if not capability.durations:
        return None
    duration = params.duration if params.duration is not None else capability.default_duration
    if duration not in capability.durations:
        raise UnsupportedValueError("duration", duration, capability.canonical_name, list(capability.durations))
    return duration


def check_image_size(params: RequestParameters, capability: ModelCapability) -> None:
    if not params.image_size:
        return
    if not capability.image_sizes:
        raise UnsupportedFeatureError("Selecting an image size", capability.canonical_name, field="image_size")
    if params.image_size not in capability.image_sizes:
        raise UnsupportedValueError(
            "image_size", params.image_size, capability.canonical_name, list(capability.image_sizes)
        )


def check_output_count(params: RequestParameters, capability: ModelCapability) -> None:
    if params.output_count is None or capability.max_outputs is None:
        return
    if params.output_count < 1 or params.output_count > capability.max_outputs:
        raise OutputCountError(
            params.count_field or "output_count",
            params.output_count,
            capability.canonical_name,
            capability.max_outputs,
        )


def check_features(params: RequestParameters, capability: ModelCapability) -> None:
    model = capability.canonical_name
    if params.generate_audio and not capability.supports_audio:
        raise UnsupportedFeatureError("Audio generation", model, field="generate_audio")
    if params.last_frame is not None and not capability.supports_last_frame:
        raise UnsupportedFeatureError("Interpolation with a last frame", model, field="last_frame_uri")
    if params.reference_images_json and not capability.supports_reference_images:
        raise UnsupportedFeatureError("Providing reference images", model, field="reference_images")


def validate(params: RequestParameters, capability: ModelCapability) -> ValidatedDescriptor:
    """
    Check params against a capability and build the validated descriptor.

    Args:
        params: Resolved parameters whose model is a canonical name
        capability: The capability of params.model

    Returns:
        ValidatedDescriptor ready for the generation backend

    Raises:
        GenmediaValidationError subclasses, one per failed check
    """
    if capability.canonical_name != params.model or capability.family != params.family:
        raise UnsupportedModelError(params.model, params.family, [capability.canonical_name])

    check_aspect_ratio(params, capability)
    duration = resolve_duration(params, capability)
    check_image_size(params, capability)
    check_output_count(params, capability)
    check_features(params, capability)

    references = parse_reference_images(params.reference_images_json, capability)

    return ValidatedDescriptor(
        operation=params.operation,
        family=params.family,
        model=capability.canonical_name,
        prompt=params.prompt,
        storage_uri=params.storage_uri,
        output_directory=params.output_directory,
        aspect_ratio=params.aspect_ratio,
        output_count=params.output_count,
        duration_secs=duration,
        image_size=params.image_size,
        generate_audio=params.generate_audio,
        image=params.image,
        last_frame=params.last_frame,
        reference_images=tuple(references),
    )


def validate_request(params: RequestParameters, registry: CapabilityRegistry) -> ValidatedDescriptor:
    """Resolve params.model through the alias index, then validate."""
    canonical, found = registry.resolve(params.family, params.model)
    if not found:
        raise UnsupportedModelError(params.model, params.family, registry.list_names(params.family))
    params = replace(params, model=canonical)
    capability = check_model(params, registry)
    return validate(params, capability)
