"""Shared CLI utilities: exit codes, output helpers and argument parsing."""

import json
import os
import sys
from pathlib import Path

# Exit codes
EXIT_OK = 0
EXIT_ERROR = 1
EXIT_VALIDATION = 3
EXIT_NOT_FOUND = 6

_EXIT_CODES = {
    "NOT_FOUND": EXIT_NOT_FOUND,
    "UNSUPPORTED_MODEL": EXIT_NOT_FOUND,
}


def _exit_code_for_error(result: dict) -> int:
    """Map an error result to an exit code. Other isError results are validation failures."""
    code = result.get("code", "")
    if code in _EXIT_CODES:
        return _EXIT_CODES[code]
    if result.get("isError"):
        return EXIT_VALIDATION
    return EXIT_ERROR


def _output(data: dict, pretty: bool = False) -> None:
    """Write JSON data to stdout (results/data only)."""
    if pretty:
        json.dump(data, sys.stdout, indent=2, default=str)
    else:
        json.dump(data, sys.stdout, default=str)
    sys.stdout.write("\n")
    sys.stdout.flush()


def _msg(text: str) -> None:
    """Write a status message to stderr."""
    sys.stderr.write(text)
    if not text.endswith("\n"):
        sys.stderr.write("\n")
    sys.stderr.flush()


def _error(message: str, code: str = "CLI_ERROR") -> dict:
    return {"error": message, "code": code}


def _is_pretty() -> bool:
    return os.environ.get("GENMEDIA_PRETTY", "").lower() in ("1", "true", "yes")


def _parse_json_arg(value: str) -> dict:
    """Parse a JSON string argument, supporting both raw JSON and @file references."""
    if value.startswith("@"):
        path = Path(value[1:])
        if not path.exists():
            _msg(json.dumps(_error(f"File not found: {path}", "INVALID_PARAMS")))
            sys.exit(EXIT_VALIDATION)
        return json.loads(path.read_text())
    return json.loads(value)


def _add_common_args(parser) -> None:
    """Add --pretty flag."""
    parser.add_argument("--pretty", action="store_true", help="Pretty-print JSON output")
