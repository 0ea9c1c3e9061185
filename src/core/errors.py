"""
Core Error Handling System

Centralized error classes with actionable guidance for request validation.

All validation errors render to the MCP tool-error shape:
- Include "isError": true
- Include "code" for error categorization
- Include "suggestion" for actionable guidance
- Include "details" for additional context
"""

from typing import Dict, Any, List, Optional


class RegistryConfigError(Exception):
    """
    The model catalog is inconsistent (duplicate ids, alias collisions, bad limits).

    Raised while the registry is being built. It is a startup failure, never a
    per-request rejection.
    """


class GenmediaValidationError(Exception):
    """
    A request was rejected before reaching the generation backend.

    Subclasses set ``code`` and build a message naming the offending field.
    """

    code: str = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        suggestion: str = "",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.error = message
        self.field = field
        self.suggestion = suggestion
        self.details = dict(details or {})
        if field and "field" not in self.details:
            self.details["field"] = field

    def to_dict(self) -> Dict[str, Any]:
        """Convert to MCP-compliant error dict."""
        result: Dict[str, Any] = {
            "isError": True,
            "code": self.code,
            "error": self.error,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


class MissingParameterError(GenmediaValidationError):
    """Required parameter absent or blank."""

    code = "MISSING_PARAMETER"

    def __init__(self, field: str, hint: str = ""):
        message = f"{field} must be a non-empty string and is required"
        if hint:
            message = f"{message} {hint}"
        super().__init__(message, field=field, suggestion=f"Provide a value for '{field}'.")


class InvalidParameterError(GenmediaValidationError):
    """Parameter present but of the wrong type or shape."""

    code = "INVALID_PARAMETER"

    def __init__(self, field: str, expected: str, provided: Any = None):
        super().__init__(
            f"Parameter '{field}' must be {expected}, got {provided!r}",
            field=field,
            details={"expected": expected, "provided": provided},
        )


class InvalidUriError(GenmediaValidationError):
    """Resource URI does not use the storage scheme."""

    code = "INVALID_URI"

    def __init__(self, field: str, uri: str, scheme: str = "gs://"):
        super().__init__(
            f"invalid {field} '{uri}'. Must be a GCS URI starting with '{scheme}'",
            field=field,
            suggestion=f"Upload the file to a bucket and pass its {scheme} URI.",
            details={"uri": uri},
        )


class UnsupportedModelError(GenmediaValidationError):
    """Model reference matched no canonical name or alias."""

    code = "UNSUPPORTED_MODEL"

    def __init__(self, model: str, family: str, available: Optional[List[str]] = None):
        available = available or []
        super().__init__(
            f"model '{model}' is not a valid or supported {family} model name",
            field="model",
            suggestion=f"Use one of: {', '.join(available)}" if available else "",
            details={"model": model, "family": family, "available": available},
        )


class UnsupportedValueError(GenmediaValidationError):
    """Value outside the model's supported set (aspect ratio, duration, size)."""

    code = "UNSUPPORTED_VALUE"

    def __init__(self, field: str, value: Any, model: str, supported: List[Any]):
        label = field.replace("_", " ")
        super().__init__(
            f"{label} {value} not supported by model '{model}'. Supported: {', '.join(str(s) for s in supported)}",
            field=field,
            details={"value": value, "model": model, "supported": list(supported)},
        )


class OutputCountError(GenmediaValidationError):
    """Requested output count outside [1, max]."""

    code = "OUTPUT_COUNT_OUT_OF_RANGE"

    def __init__(self, field: str, value: int, model: str, maximum: int):
        super().__init__(
            f"{field} must be between 1 and {maximum} for model '{model}', got {value}",
            field=field,
            details={"value": value, "model": model, "min": 1, "max": maximum},
        )


class UnsupportedFeatureError(GenmediaValidationError):
    """Feature-gated parameter supplied for a model lacking the capability."""

    code = "UNSUPPORTED_FEATURE"

    def __init__(self, feature: str, model: str, field: Optional[str] = None):
        super().__init__(
            f"{feature} is not supported on model '{model}'.",
            field=field,
            suggestion="Pick a model that declares this capability; see list_models().",
            details={"feature": feature, "model": model},
        )


class MalformedInputError(GenmediaValidationError):
    """Structured (JSON) field could not be parsed."""

    code = "MALFORMED_INPUT"

    def __init__(self, field: str, reason: str):
        super().__init__(
            f"Failed to parse '{field}' JSON: {reason}. "
            "Please provide a valid JSON array of objects, each with 'uri' and 'type'.",
            field=field,
        )


class UnsupportedMimeTypeError(GenmediaValidationError):
    """MIME type for a primary resource is unsupported or not inferable."""

    code = "UNSUPPORTED_MIME_TYPE"

    def __init__(self, field: str, uri: str = "", mime_type: str = ""):
        if mime_type:
            message = f"Unsupported MIME type '{mime_type}'. Please use 'image/jpeg' or 'image/png'."
        else:
            message = (
                f"MIME type for '{uri}' could not be inferred or is not supported. "
                f"Please specify '{field}' as 'image/jpeg' or 'image/png'."
            )
        super().__init__(message, field=field, details={"uri": uri, "mime_type": mime_type})


class UnknownOperationError(GenmediaValidationError):
    """Operation name not in the operation table."""

    code = "UNKNOWN_OPERATION"

    def __init__(self, operation: str, available: List[str]):
        super().__init__(
            f"Unknown operation '{operation}'. Use: {'|'.join(available)}",
            field="operation",
            details={"operation": operation, "available": list(available)},
        )
