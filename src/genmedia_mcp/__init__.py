"""
Generative Media Capabilities

Model-capability registry and request validation for Veo, Imagen and Gemini
generation tools. Requests are resolved, defaulted and checked against the
target model before any backend call is made.
"""

__version__ = "0.1.0"

from .model_registry import (
    AliasIndex,
    CapabilityRegistry,
    ModelCapability,
    build_registry,
    get_registry,
    load_catalog_file,
)
from .descriptions import describe
from .config import Settings, get_settings
from .params import OPERATIONS, RequestParameters, resolve_parameters
from .validation import validate, validate_request
from .operations import (
    plan_request,
    plan_veo_t2v,
    plan_veo_i2v,
    plan_veo_interpolate,
    plan_imagen_t2i,
    plan_gemini_generate,
)
from .types import ImageRef, ReferenceType, ValidatedDescriptor

__all__ = [
    "__version__",
    "AliasIndex",
    "CapabilityRegistry",
    "ModelCapability",
    "build_registry",
    "get_registry",
    "load_catalog_file",
    "describe",
    "Settings",
    "get_settings",
    "OPERATIONS",
    "RequestParameters",
    "resolve_parameters",
    "validate",
    "validate_request",
    "plan_request",
    "plan_veo_t2v",
    "plan_veo_i2v",
    "plan_veo_interpolate",
    "plan_imagen_t2i",
    "plan_gemini_generate",
    "ImageRef",
    "ReferenceType",
    "ValidatedDescriptor",
]
