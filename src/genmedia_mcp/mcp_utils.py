"""
MCP Utilities

Structured JSON logging with correlation ids, MCP error dicts, and the
wrapper every tool in server.py goes through.
"""

import time
import uuid
import json
import logging
import functools
from typing import Any, Dict, Optional
from dataclasses import dataclass, field
from contextvars import ContextVar

from core.errors import GenmediaValidationError

# =============================================================================
# Structured Logging
# =============================================================================

logger = logging.getLogger("genmedia-mcp")
logger.setLevel(logging.INFO)

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


class JSONFormatter(logging.Formatter):
    """One JSON object per record: base fields, correlation id, then custom fields."""

    def format(self, record):
        # UTC, millisecond precision
        stamp = time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
        entry: Dict[str, Any] = {
            "timestamp": f"{stamp}.{int(record.msecs):03d}Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        cid = record.__dict__.get("correlation_id")
        if cid is not None:
            entry["correlation_id"] = cid
        entry.update(record.__dict__.get("custom_fields", {}))
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, separators=(",", ":"), default=str)


if not logger.handlers:
    _stream = logging.StreamHandler()
    _stream.setFormatter(JSONFormatter())
    logger.addHandler(_stream)


def _short_id() -> str:
    return uuid.uuid4().hex[:8]


correlation_id_var: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)


def set_correlation_id(cid: str):
    correlation_id_var.set(cid)


def get_correlation_id() -> str:
    """Current correlation id; one is minted on first use in a context."""
    cid = correlation_id_var.get()
    if cid is None:
        cid = _short_id()
        correlation_id_var.set(cid)
    return cid


def clear_correlation_id():
    correlation_id_var.set(None)


def log_structured(level: str, message: str, **fields):
    """Log message at level with the correlation id and fields attached."""
    extra: Dict[str, Any] = {"correlation_id": get_correlation_id()}
    if fields:
        extra["custom_fields"] = fields
    logger.log(_LEVELS[level], message, extra=extra)


# status -> (level, message)
_COMPLETION_LOGS = {
    "success": ("info", "tool_completed"),
    "rejected": ("warning", "tool_rejected"),
}


@dataclass
class ToolInvocation:
    """
    One tool call, logged once on completion.

    Statuses: "success"; "rejected" when the request failed validation;
    anything else is logged as a failure at error level.
    """

    tool_name: str
    invocation_id: str = field(default_factory=_short_id)
    correlation_id: str = field(default_factory=get_correlation_id)
    started: float = field(default_factory=time.perf_counter)

    def complete(
        self,
        status: str = "success",
        error: Optional[str] = None,
        code: Optional[str] = None,
    ) -> Dict[str, Any]:
        entry: Dict[str, Any] = {
            "tool": self.tool_name,
            "invocation_id": self.invocation_id,
            "correlation_id": self.correlation_id,
            "latency_ms": round((time.perf_counter() - self.started) * 1000, 2),
            "status": status,
        }
        if error:
            entry["error"] = error
        if code:
            entry["code"] = code
        level, message = _COMPLETION_LOGS.get(status, ("error", "tool_failed"))
        log_structured(level, message, **entry)
        return entry


# =============================================================================
# MCP Error Dicts
# =============================================================================


def mcp_error(
    message: str,
    code: str = "TOOL_ERROR",
    details: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Tool error in the MCP shape ({"isError": true, ...}).

    Example:
        return mcp_error("Unknown model family: foo", "VALIDATION_ERROR", {"family": "foo"})
    """
    result: Dict[str, Any] = {"error": message, "code": code, "isError": True}
    if details:
        result["details"] = details
    return result


def not_found_error(resource_type: str, identifier: str) -> Dict[str, Any]:
    return mcp_error(
        f"{resource_type} not found: {identifier}",
        "NOT_FOUND",
        {resource_type.lower(): identifier},
    )


# =============================================================================
# Tool Decorator with Logging
# =============================================================================


def mcp_tool_wrapper(func):
    """
    Log every call of a tool and turn failures into error dicts.

    GenmediaValidationError becomes its own to_dict(); any other exception
    is logged with its traceback and returned as INTERNAL_ERROR.

    Example:
        @mcp.tool()
        @mcp_tool_wrapper
        def my_tool(param: str) -> dict:
            ...
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        invocation = ToolInvocation(func.__name__)
        try:
            result = func(*args, **kwargs)
        except GenmediaValidationError as e:
            invocation.complete("rejected", e.error, e.code)
            return e.to_dict()
        except Exception as e:
            logger.exception("Unhandled error in tool %s", func.__name__)
            invocation.complete("error", str(e), "INTERNAL_ERROR")
            return mcp_error(str(e), "INTERNAL_ERROR")

        if isinstance(result, dict) and result.get("isError"):
            invocation.complete("rejected", result.get("error"), result.get("code"))
        else:
            invocation.complete("success")
        return result

    return wrapper
