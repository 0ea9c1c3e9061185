"""
genmedia CLI: capability lookup and request validation from the shell.

Usage:
    genmedia models list --family veo
    genmedia models describe imagen
    genmedia models resolve "Veo 3 Fast" --family veo
    genmedia validate veo_t2v --params '{"prompt": "a fox", "duration": 8}'
    genmedia validate veo_interpolate --params @request.json
    genmedia serve
"""

import argparse
import json
import sys

from core.errors import GenmediaValidationError

from .cli_utils import (
    EXIT_ERROR,
    EXIT_NOT_FOUND,
    EXIT_OK,
    EXIT_VALIDATION,
    _add_common_args,
    _error,
    _exit_code_for_error,
    _is_pretty,
    _output,
    _parse_json_arg,
)
from .params import OPERATIONS


def _pretty(args) -> bool:
    return getattr(args, "pretty", False) or _is_pretty()


def cmd_models_list(args):
    """List canonical model names per family."""
    from .model_registry import get_registry

    registry = get_registry()
    families = [args.family] if args.family else registry.families()
    unknown = [f for f in families if f not in registry.families()]
    if unknown:
        _output(_error(f"Unknown family: {unknown[0]}", "NOT_FOUND"), _pretty(args))
        return EXIT_NOT_FOUND
    result = {
        family: [registry.lookup(family, name).to_dict() for name in registry.list_names(family)]
        for family in families
    }
    _output(result, _pretty(args))
    return EXIT_OK


def cmd_models_describe(args):
    """Print the tool-description listing for a family."""
    from .descriptions import describe
    from .model_registry import get_registry

    if args.family not in get_registry().families():
        _output(_error(f"Unknown family: {args.family}", "NOT_FOUND"), _pretty(args))
        return EXIT_NOT_FOUND
    sys.stdout.write(describe(args.family))
    sys.stdout.flush()
    return EXIT_OK


def cmd_models_resolve(args):
    """Resolve a model name or alias."""
    from .model_registry import get_registry

    canonical, found = get_registry().resolve(args.family, args.name)
    _output({"input": args.name, "family": args.family, "canonical_name": canonical, "found": found}, _pretty(args))
    return EXIT_OK if found else EXIT_NOT_FOUND


def cmd_validate(args):
    """Validate a request and print the descriptor or the rejection."""
    from .operations import plan_request

    arguments = _parse_json_arg(args.params) if args.params else {}
    if not isinstance(arguments, dict):
        _output(_error("--params must be a JSON object", "INVALID_PARAMS"), _pretty(args))
        return EXIT_VALIDATION
    try:
        descriptor = plan_request(args.operation, arguments)
    except GenmediaValidationError as e:
        result = e.to_dict()
        _output(result, _pretty(args))
        return _exit_code_for_error(result)
    _output(descriptor.to_dict(), _pretty(args))
    return EXIT_OK


def cmd_serve(args):
    """Run the MCP server on stdio."""
    from .server import main as serve

    serve()
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="genmedia", description="Generative media model capabilities")
    sub = parser.add_subparsers(dest="command")

    # ── models ──
    p_models = sub.add_parser("models", help="Model registry operations")
    models_sub = p_models.add_subparsers(dest="models_command")

    p_ml = models_sub.add_parser("list", help="List models and capabilities")
    p_ml.add_argument("--family", help="Model family: veo, imagen, gemini")
    _add_common_args(p_ml)
    p_ml.set_defaults(func=cmd_models_list)

    p_md = models_sub.add_parser("describe", help="Human-readable model listing")
    p_md.add_argument("family", help="Model family: veo, imagen, gemini")
    p_md.set_defaults(func=cmd_models_describe)

    p_mr = models_sub.add_parser("resolve", help="Resolve a model name or alias")
    p_mr.add_argument("name", help="Model name or alias, e.g. 'Veo 3 Fast'")
    p_mr.add_argument("--family", default="veo", help="Model family (default: veo)")
    _add_common_args(p_mr)
    p_mr.set_defaults(func=cmd_models_resolve)

    # ── validate ──
    p_val = sub.add_parser("validate", help="Validate a generation request")
    p_val.add_argument("operation", choices=list(OPERATIONS), help="Operation to validate")
    p_val.add_argument("--params", help="Request arguments as JSON or @file.json")
    _add_common_args(p_val)
    p_val.set_defaults(func=cmd_validate)

    # ── serve ──
    p_srv = sub.add_parser("serve", help="Run the MCP server (stdio)")
    p_srv.set_defaults(func=cmd_serve)

    return parser


def main():
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(EXIT_ERROR)

    func = getattr(args, "func", None)
    if func is None:
        parser.parse_args([args.command, "--help"])
        sys.exit(EXIT_ERROR)

    try:
        exit_code = func(args)
        sys.exit(exit_code or EXIT_OK)
    except json.JSONDecodeError as e:
        _output(_error(f"Invalid JSON: {e}", "INVALID_PARAMS"), _pretty(args))
        sys.exit(EXIT_VALIDATION)
    except KeyboardInterrupt:
        sys.exit(130)
    except Exception as e:
        _output(_error(str(e), "CLI_ERROR"), _pretty(args))
        sys.exit(EXIT_ERROR)


if __name__ == "__main__":
    main()
