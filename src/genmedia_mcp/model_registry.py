"""
Model Registry - Single Source of Truth for Model Capabilities

Turns the declarative tables in model_catalog.py (or a JSON catalog file)
into immutable ModelCapability objects plus a per-family alias index.

The registry is built once and never mutated. Integrity problems in the
catalog (duplicate ids, alias collisions, empty limit sets) raise
RegistryConfigError at build time instead of surfacing as odd request
behaviour later.

Usage:
    from .model_registry import get_registry

    registry = get_registry()
    canonical, found = registry.resolve("veo", "Veo 3 Fast")
    capability = registry.lookup("veo", canonical)
"""

import json
import threading
from dataclasses import dataclass, fields
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from core.errors import RegistryConfigError, UnsupportedModelError

from .model_catalog import DEFAULT_CATALOG


# Roles a reference image may take
REFERENCE_TYPES: Tuple[str, ...] = ("ASSET", "STYLE")

FAMILY_LABELS: Dict[str, str] = {
    "imagen": "image",
    "veo": "video",
    "gemini": "content",
}

# Families without an output count or aspect ratio axis
UNCOUNTED_FAMILIES: Tuple[str, ...] = ("gemini",)


def _list_field(where: str, data: Mapping[str, Any], key: str) -> List[Any]:
    """A list-valued catalog field; absent means empty."""
    value = data.get(key, [])
    if not isinstance(value, (list, tuple)):
        raise RegistryConfigError(f"{where}: {key} must be a list, got {type(value).__name__}")
    return list(value)


# =============================================================================
# Model Type Definitions
# =============================================================================


@dataclass(frozen=True)
class ModelCapability:
    """Complete capability specification for one model."""

    canonical_name: str
    family: str
    aliases: Tuple[str, ...] = ()
    max_outputs: Optional[int] = None
    aspect_ratios: Tuple[str, ...] = ()
    durations: Tuple[int, ...] = ()
    default_duration: Optional[int] = None
    image_sizes: Tuple[str, ...] = ()
    supports_audio: bool = False
    supports_last_frame: bool = False
    supports_reference_images: bool = False
    reference_types: Tuple[str, ...] = ()
    description: str = ""

    @classmethod
    def from_dict(cls, family: str, data: Mapping[str, Any]) -> "ModelCapability":
        """Build a capability from a catalog entry, rejecting unknown keys and mistyped lists."""
        known = {f.name for f in fields(cls)} - {"family"}
        unknown = set(data) - known
        if unknown:
            raise RegistryConfigError(
                f"{family} catalog entry {data.get('canonical_name', '?')!r} has unknown keys: "
                f"{', '.join(sorted(unknown))}"
            )
        name = str(data.get("canonical_name", "")).strip()
        if not name:
            raise RegistryConfigError(f"{family} catalog entry without canonical_name")

        where = f"{family} model '{name}'"
        durations = _list_field(where, data, "durations")
        if any(isinstance(d, bool) or not isinstance(d, int) for d in durations):
            raise RegistryConfigError(f"{where}: durations must be integers")

        supports_refs = bool(data.get("supports_reference_images", False))
        ref_types = tuple(str(t).upper() for t in _list_field(where, data, "reference_types"))
        if supports_refs and not ref_types:
            ref_types = REFERENCE_TYPES

        return cls(
            canonical_name=name,
            family=family,
            aliases=tuple(str(a) for a in _list_field(where, data, "aliases")),
            max_outputs=data.get("max_outputs"),
            aspect_ratios=tuple(_list_field(where, data, "aspect_ratios")),
            durations=tuple(durations),
            default_duration=data.get("default_duration"),
            image_sizes=tuple(_list_field(where, data, "image_sizes")),
            supports_audio=bool(data.get("supports_audio", False)),
            supports_last_frame=bool(data.get("supports_last_frame", False)),
            supports_reference_images=supports_refs,
            reference_types=ref_types,
            description=str(data.get("description", "")),
        )

    def check(self) -> None:
        """Raise RegistryConfigError if the limits are inconsistent."""
        where = f"{self.family} model '{self.canonical_name}'"
        if self.max_outputs is None and self.family not in UNCOUNTED_FAMILIES:
            raise RegistryConfigError(f"{where}: max_outputs is required")
        if self.max_outputs is not None:
            if isinstance(self.max_outputs, bool) or not isinstance(self.max_outputs, int) or self.max_outputs < 1:
                raise RegistryConfigError(f"{where}: max_outputs must be a positive integer")
            if not self.aspect_ratios:
                raise RegistryConfigError(f"{where}: aspect_ratios must not be empty")
        if any(d < 1 for d in self.durations):
            raise RegistryConfigError(f"{where}: durations must be positive")
        if self.durations and self.default_duration is None:
            raise RegistryConfigError(f"{where}: default_duration is required when durations are declared")
        if self.default_duration is not None and self.default_duration not in self.durations:
            raise RegistryConfigError(f"{where}: default_duration {self.default_duration} not in durations")
        bad_types = [t for t in self.reference_types if t not in REFERENCE_TYPES]
        if bad_types:
            raise RegistryConfigError(f"{where}: unknown reference_types {bad_types}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dict, omitting axes the model lacks."""
        result: Dict[str, Any] = {
            "canonical_name": self.canonical_name,
            "family": self.family,
            "aliases": list(self.aliases),
        }
        if self.max_outputs is not None:
            result["max_outputs"] = self.max_outputs
        if self.aspect_ratios:
            result["aspect_ratios"] = list(self.aspect_ratios)
        if self.durations:
            result["durations"] = list(self.durations)
            result["default_duration"] = self.default_duration
        if self.image_sizes:
            result["image_sizes"] = list(self.image_sizes)
        if self.family == "veo":
            result["supports_audio"] = self.supports_audio
            result["supports_last_frame"] = self.supports_last_frame
            result["supports_reference_images"] = self.supports_reference_images
        if self.reference_types:
            result["reference_types"] = list(self.reference_types)
        if self.description:
            result["description"] = self.description
        return result


# =============================================================================
# Alias Index
# =============================================================================


def normalize_name(name: str) -> str:
    return name.strip().lower()


class AliasIndex:
    """Case-insensitive name/alias -> canonical id lookup for one family."""

    def __init__(self, family: str, models: Iterable[ModelCapability]):
        self.family = family
        index: Dict[str, str] = {}
        for model in models:
            for name in (model.canonical_name, *model.aliases):
                key = normalize_name(name)
                if not key:
                    raise RegistryConfigError(f"{family} model '{model.canonical_name}' declares a blank alias")
                owner = index.get(key)
                if owner is not None and owner != model.canonical_name:
                    raise RegistryConfigError(
                        f"{family} alias '{name}' is claimed by both '{owner}' and '{model.canonical_name}'"
                    )
                index[key] = model.canonical_name
        self._index = MappingProxyType(index)

    def resolve(self, raw_name: str) -> Tuple[str, bool]:
        """
        Resolve a model name or alias to its canonical name.

        Returns:
            Tuple of (canonical_name, found). canonical_name is "" when not found.
        """
        if not isinstance(raw_name, str):
            return "", False
        canonical = self._index.get(normalize_name(raw_name))
        if canonical is None:
            return "", False
        return canonical, True

    def as_dict(self) -> Dict[str, str]:
        return dict(self._index)

    def __len__(self) -> int:
        return len(self._index)


# =============================================================================
# Capability Registry
# =============================================================================


class CapabilityRegistry:
    """Immutable per-family table of model capabilities with alias indexes."""

    def __init__(self, families: Mapping[str, Iterable[ModelCapability]]):
        tables: Dict[str, Mapping[str, ModelCapability]] = {}
        indexes: Dict[str, AliasIndex] = {}
        for family, models in families.items():
            table: Dict[str, ModelCapability] = {}
            for model in models:
                if model.family != family:
                    raise RegistryConfigError(
                        f"model '{model.canonical_name}' declares family '{model.family}' but is listed under '{family}'"
                    )
                if model.canonical_name in table:
                    raise RegistryConfigError(f"duplicate {family} model '{model.canonical_name}'")
                model.check()
                table[model.canonical_name] = model
            tables[family] = MappingProxyType(table)
            indexes[family] = AliasIndex(family, table.values())
        self._tables = MappingProxyType(tables)
        self._indexes = MappingProxyType(indexes)

    def families(self) -> List[str]:
        return list(self._tables.keys())

    def models(self, family: str) -> Mapping[str, ModelCapability]:
        """Read-only view of canonical name -> capability, declaration order."""
        return self._tables.get(family, MappingProxyType({}))

    def list_names(self, family: str) -> List[str]:
        """Canonical names for a family, sorted."""
        return sorted(self.models(family).keys())

    def lookup(self, family: str, canonical_name: str) -> Optional[ModelCapability]:
        return self.models(family).get(canonical_name)

    def alias_index(self, family: str) -> Optional[AliasIndex]:
        return self._indexes.get(family)

    def resolve(self, family: str, model: str) -> Tuple[str, bool]:
        index = self._indexes.get(family)
        if index is None:
            return "", False
        return index.resolve(model)

    def require(self, family: str, model: str) -> ModelCapability:
        """Resolve a name or alias to its capability or raise UnsupportedModelError."""
        canonical, found = self.resolve(family, model)
        capability = self.lookup(family, canonical) if found else None
        if capability is None:
            raise UnsupportedModelError(model, family, self.list_names(family))
        return capability


def build_registry(catalog: Optional[Mapping[str, Iterable[Mapping[str, Any]]]] = None) -> CapabilityRegistry:
    """
    Build a registry from catalog tables.

    Args:
        catalog: family -> list of catalog entries. Defaults to the built-in tables.

    Raises:
        RegistryConfigError: if the catalog is inconsistent.
    """
    if catalog is None:
        catalog = DEFAULT_CATALOG
    families = {
        family: [ModelCapability.from_dict(family, entry) for entry in entries]
        for family, entries in catalog.items()
    }
    return CapabilityRegistry(families)


def load_catalog_file(path: str) -> Dict[str, List[Dict[str, Any]]]:
    """Read a JSON catalog file shaped like model_catalog.DEFAULT_CATALOG."""
    catalog_path = Path(path).expanduser()
    try:
        data = json.loads(catalog_path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        raise RegistryConfigError(f"Cannot load model catalog {catalog_path}: {e}") from e
    if not isinstance(data, dict) or not all(isinstance(v, list) for v in data.values()):
        raise RegistryConfigError(f"Model catalog {catalog_path} must map family names to lists of models")
    return data


# Global registry instance
_registry: Optional[CapabilityRegistry] = None
_registry_lock = threading.Lock()


def get_registry() -> CapabilityRegistry:
    """Get or create the global registry (built-in tables or GENMEDIA_MODEL_CATALOG)."""
    global _registry
    if _registry is None:
        from .config import get_settings

        with _registry_lock:
            if _registry is None:
                catalog_path = get_settings().model_catalog
                catalog = load_catalog_file(catalog_path) if catalog_path else None
                _registry = build_registry(catalog)
    return _registry


def reset_registry() -> None:
    """Reset the global registry (for testing)."""
    global _registry
    _registry = None
