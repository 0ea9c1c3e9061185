"""
Model descriptions for tool discovery.

Output is a pure function of the registry: models are listed in sorted
canonical-name order so the text is stable across runs and processes.
"""

from typing import List, Optional

from .model_registry import CapabilityRegistry, ModelCapability, FAMILY_LABELS, get_registry


def _aliases(info: ModelCapability) -> str:
    return "*" + "*, *".join(info.aliases) + "*"


def _veo_line(info: ModelCapability) -> str:
    durations = ", ".join(str(d) for d in info.durations)
    line = (
        f"- *{info.canonical_name}* (Durations: [{durations}]s, Max Videos: {info.max_outputs}, "
        f"Ratios: {', '.join(info.aspect_ratios)})"
    )
    if info.aliases:
        line += f" Aliases: {_aliases(info)}"
    return line


def _imagen_line(info: ModelCapability) -> str:
    line = f"- *{info.canonical_name}* (Max Images: {info.max_outputs}, Ratios: {', '.join(info.aspect_ratios)})"
    if info.image_sizes:
        line += f" (Sizes: {', '.join(info.image_sizes)})"
    if info.aliases:
        line += f" Aliases: {_aliases(info)}"
    return line


def _gemini_line(info: ModelCapability) -> str:
    line = f"- *{info.canonical_name}*: {info.description}"
    if info.aliases:
        line += f" (Aliases: {_aliases(info)})"
    return line


def _generic_line(info: ModelCapability) -> str:
    parts = []
    if info.durations:
        parts.append(f"Durations: [{', '.join(str(d) for d in info.durations)}]s")
    if info.max_outputs is not None:
        parts.append(f"Max Outputs: {info.max_outputs}")
    if info.aspect_ratios:
        parts.append(f"Ratios: {', '.join(info.aspect_ratios)}")
    if info.image_sizes:
        parts.append(f"Sizes: {', '.join(info.image_sizes)}")
    line = f"- *{info.canonical_name}*"
    if parts:
        line += f" ({', '.join(parts)})"
    if info.aliases:
        line += f" Aliases: {_aliases(info)}"
    return line


_LINE_FORMATTERS = {
    "veo": _veo_line,
    "imagen": _imagen_line,
    "gemini": _gemini_line,
}


def describe(family: str, registry: Optional[CapabilityRegistry] = None) -> str:
    """
    Build the model listing used in tool descriptions.

    Args:
        family: Model family ("veo", "imagen", "gemini")
        registry: Registry to describe; defaults to the global one

    Returns:
        Header line followed by one line per model, newline-terminated
    """
    registry = registry or get_registry()
    label = FAMILY_LABELS.get(family, family)
    format_line = _LINE_FORMATTERS.get(family, _generic_line)

    lines: List[str] = [f"Model for {label} generation. Can be a full model ID or a common name. Supported models:"]
    models = registry.models(family)
    for name in sorted(models):
        lines.append(format_line(models[name]))
    return "\n".join(lines) + "\n"
