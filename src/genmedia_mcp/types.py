"""
Value types shared by the resolver, validator and tool surface.

ImageRef covers both primary inputs (image_uri, first/last frame) and
auxiliary reference images; only the latter carry a role.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Tuple, TypedDict

from typing_extensions import NotRequired


Family = Literal["veo", "imagen", "gemini"]


class ReferenceType(str, Enum):
    """Role of a reference image."""

    ASSET = "ASSET"
    STYLE = "STYLE"


@dataclass(frozen=True)
class ImageRef:
    """A storage-hosted image input."""

    uri: str
    mime_type: str
    role: Optional[ReferenceType] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"uri": self.uri, "mime_type": self.mime_type}
        if self.role is not None:
            result["type"] = self.role.value
        return result


class ImageRefDict(TypedDict):
    uri: str
    mime_type: str
    type: NotRequired[str]


class DescriptorDict(TypedDict):
    """Serialized ValidatedDescriptor."""

    operation: str
    family: str
    model: str
    prompt: str
    storage_uri: NotRequired[str]
    output_directory: NotRequired[str]
    aspect_ratio: NotRequired[str]
    output_count: NotRequired[int]
    duration_secs: NotRequired[int]
    image_size: NotRequired[str]
    generate_audio: NotRequired[bool]
    image: NotRequired[ImageRefDict]
    last_frame: NotRequired[ImageRefDict]
    reference_images: NotRequired[List[ImageRefDict]]


@dataclass(frozen=True)
class ValidatedDescriptor:
    """
    A request that passed every constraint check for its model.

    Only ConstraintValidator builds these; the backend client can use every
    field without re-checking it.
    """

    operation: str
    family: str
    model: str
    prompt: str = ""
    storage_uri: str = ""
    output_directory: str = ""
    aspect_ratio: str = ""
    output_count: Optional[int] = None
    duration_secs: Optional[int] = None
    image_size: str = ""
    generate_audio: bool = False
    image: Optional[ImageRef] = None
    last_frame: Optional[ImageRef] = None
    reference_images: Tuple[ImageRef, ...] = ()

    def to_dict(self) -> DescriptorDict:
        """Convert to a JSON-friendly dict, omitting unset optional fields."""
        result: Dict[str, Any] = {
            "operation": self.operation,
            "family": self.family,
            "model": self.model,
            "prompt": self.prompt,
        }
        if self.storage_uri:
            result["storage_uri"] = self.storage_uri
        if self.output_directory:
            result["output_directory"] = self.output_directory
        if self.aspect_ratio:
            result["aspect_ratio"] = self.aspect_ratio
        if self.output_count is not None:
            result["output_count"] = self.output_count
        if self.duration_secs is not None:
            result["duration_secs"] = self.duration_secs
        if self.image_size:
            result["image_size"] = self.image_size
        if self.family == "veo":
            result["generate_audio"] = self.generate_audio
        if self.image is not None:
            result["image"] = self.image.to_dict()
        if self.last_frame is not None:
            result["last_frame"] = self.last_frame.to_dict()
        if self.reference_images:
            result["reference_images"] = [ref.to_dict() for ref in self.reference_images]
        return result  # type: ignore[return-value]
