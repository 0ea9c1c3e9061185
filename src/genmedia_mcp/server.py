"""Generative media capability MCP Server - Main entry point."""

from typing import Any, Dict, Optional

from mcp.server.fastmcp import FastMCP

from .descriptions import describe
from .mcp_utils import mcp_error, mcp_tool_wrapper, not_found_error
from .model_registry import get_registry
from .operations import plan_request

# Initialize MCP server
mcp = FastMCP(
    "genmedia-capabilities",
    instructions=(
        "Model capability discovery and request validation for Veo, Imagen and Gemini. "
        "plan_* tools return a validated request descriptor or an error naming the offending field."
    ),
)


def _arguments(**kwargs) -> Dict[str, Any]:
    """Drop parameters the caller left out so defaults apply."""
    return {key: value for key, value in kwargs.items() if value is not None}


def _check_family(family: str) -> Optional[dict]:
    if family not in get_registry().families():
        return mcp_error(
            f"Unknown model family: {family}. Use: {'|'.join(get_registry().families())}",
            "VALIDATION_ERROR",
            {"family": family},
        )
    return None


# =============================================================================
# Discovery Tools (3)
# =============================================================================


@mcp.tool()
@mcp_tool_wrapper
def list_models(family: str = "veo") -> dict:
    """List models of a family with their limits and aliases. family: veo|imagen|gemini"""
    error = _check_family(family)
    if error:
        return error
    registry = get_registry()
    return {
        "family": family,
        "description": describe(family, registry),
        "models": registry.list_names(family),
    }


@mcp.tool()
@mcp_tool_wrapper
def get_model_capabilities(model: str, family: str = "veo") -> dict:
    """Get durations, ratios, max outputs and feature flags for a model name or alias."""
    error = _check_family(family)
    if error:
        return error
    registry = get_registry()
    canonical, found = registry.resolve(family, model)
    if not found:
        return not_found_error("Model", model)
    return registry.lookup(family, canonical).to_dict()


@mcp.tool()
@mcp_tool_wrapper
def resolve_model(model: str, family: str = "veo") -> dict:
    """Resolve a model name or alias to its canonical id."""
    error = _check_family(family)
    if error:
        return error
    canonical, found = get_registry().resolve(family, model)
    return {"input": model, "family": family, "canonical_name": canonical, "found": found}


# =============================================================================
# Planning Tools (5)
# =============================================================================


@mcp.tool(description="Validate a Veo text-to-video request.\n\n" + describe("veo"))
@mcp_tool_wrapper
def plan_veo_t2v(
    prompt: str,
    model: Optional[str] = None,
    bucket: Optional[str] = None,
    output_directory: Optional[str] = None,
    aspect_ratio: Optional[str] = None,
    num_videos: Optional[int] = None,
    duration: Optional[int] = None,
    generate_audio: Optional[bool] = None,
) -> dict:
    arguments = _arguments(
        prompt=prompt,
        model=model,
        bucket=bucket,
        output_directory=output_directory,
        aspect_ratio=aspect_ratio,
        num_videos=num_videos,
        duration=duration,
        generate_audio=generate_audio,
    )
    return plan_request("veo_t2v", arguments).to_dict()


@mcp.tool(description="Validate a Veo image-to-video request.\n\n" + describe("veo"))
@mcp_tool_wrapper
def plan_veo_i2v(
    image_uri: str,
    mime_type: Optional[str] = None,
    prompt: Optional[str] = None,
    model: Optional[str] = None,
    bucket: Optional[str] = None,
    output_directory: Optional[str] = None,
    aspect_ratio: Optional[str] = None,
    num_videos: Optional[int] = None,
    duration: Optional[int] = None,
    generate_audio: Optional[bool] = None,
) -> dict:
    arguments = _arguments(
        image_uri=image_uri,
        mime_type=mime_type,
        prompt=prompt,
        model=model,
        bucket=bucket,
        output_directory=output_directory,
        aspect_ratio=aspect_ratio,
        num_videos=num_videos,
        duration=duration,
        generate_audio=generate_audio,
    )
    return plan_request("veo_i2v", arguments).to_dict()


@mcp.tool(
    description=(
        "Validate a Veo first/last frame interpolation request. reference_images is a JSON array "
        'of {"uri": "gs://...", "type": "ASSET"|"STYLE"} objects.\n\n' + describe("veo")
    )
)
@mcp_tool_wrapper
def plan_veo_interpolate(
    first_frame_uri: str,
    last_frame_uri: str,
    first_frame_mime_type: Optional[str] = None,
    last_frame_mime_type: Optional[str] = None,
    reference_images: Optional[str] = None,
    prompt: Optional[str] = None,
    model: Optional[str] = None,
    bucket: Optional[str] = None,
    output_directory: Optional[str] = None,
    aspect_ratio: Optional[str] = None,
    num_videos: Optional[int] = None,
    duration: Optional[int] = None,
    generate_audio: Optional[bool] = None,
) -> dict:
    arguments = _arguments(
        first_frame_uri=first_frame_uri,
        last_frame_uri=last_frame_uri,
        first_frame_mime_type=first_frame_mime_type,
        last_frame_mime_type=last_frame_mime_type,
        reference_images=reference_images,
        prompt=prompt,
        model=model,
        bucket=bucket,
        output_directory=output_directory,
        aspect_ratio=aspect_ratio,
        num_videos=num_videos,
        duration=duration,
        generate_audio=generate_audio,
    )
    return plan_request("veo_interpolate", arguments).to_dict()


@mcp.tool(description="Validate an Imagen text-to-image request.\n\n" + describe("imagen"))
@mcp_tool_wrapper
def plan_imagen_t2i(
    prompt: str,
    model: Optional[str] = None,
    bucket: Optional[str] = None,
    output_directory: Optional[str] = None,
    aspect_ratio: Optional[str] = None,
    num_images: Optional[int] = None,
    image_size: Optional[str] = None,
) -> dict:
    arguments = _arguments(
        prompt=prompt,
        model=model,
        bucket=bucket,
        output_directory=output_directory,
        aspect_ratio=aspect_ratio,
        num_images=num_images,
        image_size=image_size,
    )
    return plan_request("imagen_t2i", arguments).to_dict()


@mcp.tool(description="Validate a Gemini content generation request.\n\n" + describe("gemini"))
@mcp_tool_wrapper
def plan_gemini_generate(
    prompt: str,
    model: Optional[str] = None,
    bucket: Optional[str] = None,
    output_directory: Optional[str] = None,
) -> dict:
    arguments = _arguments(prompt=prompt, model=model, bucket=bucket, output_directory=output_directory)
    return plan_request("gemini_generate", arguments).to_dict()


# =============================================================================
# MCP Resources (3)
# =============================================================================


@mcp.resource(
    "genmedia://models/veo",
    name="Veo Models",
    description="Supported Veo models, durations, ratios and aliases",
    mime_type="text/markdown",
)
def resource_models_veo() -> str:
    return describe("veo")


@mcp.resource(
    "genmedia://models/imagen",
    name="Imagen Models",
    description="Supported Imagen models, ratios, sizes and aliases",
    mime_type="text/markdown",
)
def resource_models_imagen() -> str:
    return describe("imagen")


@mcp.resource(
    "genmedia://models/gemini",
    name="Gemini Models",
    description="Supported Gemini models and aliases",
    mime_type="text/markdown",
)
def resource_models_gemini() -> str:
    return describe("gemini")


def main():
    """Entry point for the MCP server."""
    mcp.run()


if __name__ == "__main__":
    main()
