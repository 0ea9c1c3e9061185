"""
Model Catalog - Declarative capability tables

Plain data only. The registry in model_registry.py turns these tables into
immutable ModelCapability objects; nothing here is read at request time.

Adding a model means adding an entry to the right family table. Field names
match ModelCapability and the keys accepted by a JSON catalog file.
"""

from typing import Dict, Any, List


# =============================================================================
# Imagen (image family)
# =============================================================================

_IMAGEN_RATIOS = ["1:1", "3:4", "4:3", "9:16", "16:9"]

IMAGEN_MODELS: List[Dict[str, Any]] = [
    {
        "canonical_name": "imagen-3.0-generate-001",
        "max_outputs": 4,
        "aliases": [],
        "aspect_ratios": _IMAGEN_RATIOS,
    },
    {
        "canonical_name": "imagen-3.0-fast-generate-001",
        "max_outputs": 4,
        "aliases": ["Imagen 3 Fast"],
        "aspect_ratios": _IMAGEN_RATIOS,
    },
    {
        "canonical_name": "imagen-3.0-generate-002",
        "max_outputs": 4,
        "aliases": ["Imagen 3"],
        "aspect_ratios": _IMAGEN_RATIOS,
    },
    {
        "canonical_name": "imagen-4.0-generate-001",
        "max_outputs": 4,
        "aliases": ["Imagen 4", "Imagen4"],
        "aspect_ratios": _IMAGEN_RATIOS,
        "image_sizes": ["1K", "2K"],
    },
    {
        "canonical_name": "imagen-4.0-fast-generate-001",
        "max_outputs": 4,
        "aliases": ["Imagen 4 Fast", "Imagen4 Fast"],
        "aspect_ratios": _IMAGEN_RATIOS,
        "image_sizes": ["1K", "2K"],
    },
    {
        "canonical_name": "imagen-4.0-ultra-generate-001",
        "max_outputs": 1,
        "aliases": ["Imagen 4 Ultra", "Imagen4 Ultra"],
        "aspect_ratios": _IMAGEN_RATIOS,
        "image_sizes": ["1K", "2K"],
    },
]


# =============================================================================
# Veo (video family)
# =============================================================================

VEO_MODELS: List[Dict[str, Any]] = [
    {
        "canonical_name": "veo-2.0-generate-001",
        "aliases": ["Veo 2"],
        "default_duration": 8,
        "durations": [5, 6, 7, 8],
        "max_outputs": 4,
        "aspect_ratios": ["16:9", "9:16"],
    },
    {
        "canonical_name": "veo-2.0-generate-exp",
        "aliases": ["Veo 2.0 Exp"],
        "default_duration": 8,
        "durations": [5, 6, 7, 8],
        "max_outputs": 4,
        "aspect_ratios": ["16:9", "9:16"],
    },
    {
        "canonical_name": "veo-2.0-generate-preview",
        "aliases": ["Veo 2.0 Preview"],
        "default_duration": 8,
        "durations": [5, 6, 7, 8],
        "max_outputs": 4,
        "aspect_ratios": ["16:9", "9:16"],
    },
    {
        "canonical_name": "veo-3.0-fast-generate-001",
        "aliases": ["Veo 3 Fast"],
        "default_duration": 8,
        "durations": [4, 6, 8],
        "max_outputs": 2,
        "aspect_ratios": ["16:9"],
        "supports_audio": True,
    },
    {
        "canonical_name": "veo-3.1-generate-preview",
        "aliases": ["Veo 3.1 preview"],
        "default_duration": 8,
        "durations": [8],
        "max_outputs": 2,
        "aspect_ratios": ["16:9", "9:16"],
        "supports_last_frame": True,
        "supports_reference_images": True,
        # Asset references only; style references are a veo-2 exp feature.
        "reference_types": ["ASSET"],
    },
    {
        "canonical_name": "veo-3.1-fast-generate-preview",
        "aliases": ["Veo 3.1 Fast preview"],
        "default_duration": 8,
        "durations": [8],
        "max_outputs": 2,
        "aspect_ratios": ["16:9", "9:16"],
        "supports_last_frame": True,
    },
]


# =============================================================================
# Gemini (multimodal family)
# =============================================================================

GEMINI_MODELS: List[Dict[str, Any]] = [
    {
        "canonical_name": "gemini-2.5-flash-image",
        "aliases": ["nano-banana", "nano banana"],
        "description": "Gemini 2.5 Flash Image generation model.",
    },
    {
        "canonical_name": "gemini-3-pro-preview",
        "aliases": ["Gemini 3 Pro"],
        "description": "Gemini 3 Pro Preview model.",
    },
    {
        "canonical_name": "gemini-3-pro-image-preview",
        "aliases": ["Gemini 3 Pro Image", "nano banana pro", "nano-banana-pro"],
        "description": "Gemini 3 Pro Image Preview model.",
    },
]


DEFAULT_CATALOG: Dict[str, List[Dict[str, Any]]] = {
    "imagen": IMAGEN_MODELS,
    "veo": VEO_MODELS,
    "gemini": GEMINI_MODELS,
}
