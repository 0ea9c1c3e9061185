"""
Process-wide configuration.

Read once from the environment. Request handling only ever sees a Settings
instance, never os.environ directly.
"""

import os
from dataclasses import dataclass
from typing import Optional


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be an integer, got '{raw}'") from None


def _env_str(name: str, default: str = "") -> str:
    return os.environ.get(name, default).strip() or default


@dataclass(frozen=True)
class Settings:
    """Defaults applied when a request leaves a parameter out."""

    bucket: str = ""
    default_video_aspect_ratio: str = "16:9"
    default_image_aspect_ratio: str = "1:1"
    default_count: int = 1
    default_duration: Optional[int] = None  # None = the model's own default
    default_veo_model: str = "veo-2.0-generate-001"
    default_imagen_model: str = "imagen-3.0-generate-002"
    default_gemini_model: str = "gemini-2.5-flash-image"
    model_catalog: str = ""

    def default_model(self, family: str) -> str:
        return {
            "veo": self.default_veo_model,
            "imagen": self.default_imagen_model,
            "gemini": self.default_gemini_model,
        }.get(family, "")

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from GENMEDIA_* environment variables."""
        base = cls()
        return cls(
            bucket=_env_str("GENMEDIA_BUCKET"),
            default_video_aspect_ratio=_env_str("GENMEDIA_DEFAULT_ASPECT_RATIO", base.default_video_aspect_ratio),
            default_image_aspect_ratio=_env_str(
                "GENMEDIA_DEFAULT_IMAGE_ASPECT_RATIO", base.default_image_aspect_ratio
            ),
            default_count=_env_int("GENMEDIA_DEFAULT_COUNT", base.default_count),
            default_duration=_env_int("GENMEDIA_DEFAULT_DURATION", None),
            default_veo_model=_env_str("GENMEDIA_DEFAULT_VEO_MODEL", base.default_veo_model),
            default_imagen_model=_env_str("GENMEDIA_DEFAULT_IMAGEN_MODEL", base.default_imagen_model),
            default_gemini_model=_env_str("GENMEDIA_DEFAULT_GEMINI_MODEL", base.default_gemini_model),
            model_catalog=_env_str("GENMEDIA_MODEL_CATALOG"),
        )


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create the global settings."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def reset_settings() -> None:
    """Reset the global settings (for testing)."""
    global _settings
    _settings = None
