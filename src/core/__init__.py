"""
Core Error Handling
"""

from .errors import (
    RegistryConfigError,
    GenmediaValidationError,
    MissingParameterError,
    InvalidParameterError,
    InvalidUriError,
    UnsupportedModelError,
    UnsupportedValueError,
    OutputCountError,
    UnsupportedFeatureError,
    MalformedInputError,
    UnsupportedMimeTypeError,
    UnknownOperationError,
)

__all__ = [
    "RegistryConfigError",
    "GenmediaValidationError",
    "MissingParameterError",
    "InvalidParameterError",
    "InvalidUriError",
    "UnsupportedModelError",
    "UnsupportedValueError",
    "OutputCountError",
    "UnsupportedFeatureError",
    "MalformedInputError",
    "UnsupportedMimeTypeError",
    "UnknownOperationError",
]
