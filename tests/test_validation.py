"""
Tests for constraint validation against model capabilities

Covers the check order (model, aspect ratio, duration or size, output count,
feature gates) and the boundary values of every limit.
"""

from dataclasses import FrozenInstanceError, replace

import pytest

from core.errors import (
    OutputCountError,
    UnsupportedFeatureError,
    UnsupportedModelError,
    UnsupportedValueError,
)
from genmedia_mcp.params import RequestParameters
from genmedia_mcp.types import ImageRef
from genmedia_mcp.validation import validate, validate_request


def _veo(model, **overrides):
    params = RequestParameters(
        operation="veo_t2v",
        family="veo",
        model=model,
        prompt="a fox",
        storage_uri="gs://b/veo_outputs/",
        aspect_ratio="16:9",
        output_count=1,
        count_field="num_videos",
    )
    return replace(params, **overrides)


def _imagen(model, **overrides):
    params = RequestParameters(
        operation="imagen_t2i",
        family="imagen",
        model=model,
        prompt="a fox",
        aspect_ratio="1:1",
        output_count=1,
        count_field="num_images",
    )
    return replace(params, **overrides)


class TestDurations:
    """Test duration checks for every video model."""

    def test_every_declared_duration_accepted(self, registry):
        for name, info in registry.models("veo").items():
            for duration in info.durations:
                descriptor = validate_request(_veo(name, duration=duration), registry)
                assert descriptor.duration_secs == duration

    def test_out_of_range_rejected(self, registry):
        for name, info in registry.models("veo").items():
            for duration in (min(info.durations) - 1, max(info.durations) + 1):
                with pytest.raises(UnsupportedValueError) as exc:
                    validate_request(_veo(name, duration=duration), registry)
                assert exc.value.field == "duration"

    def test_gap_in_duration_set_rejected(self, registry):
        """Veo 3 Fast supports 4, 6 and 8 only."""
        with pytest.raises(UnsupportedValueError) as exc:
            validate_request(_veo("veo-3.0-fast-generate-001", duration=5), registry)
        assert exc.value.error == (
            "duration 5 not supported by model 'veo-3.0-fast-generate-001'. Supported: 4, 6, 8"
        )

    def test_missing_duration_uses_model_default(self, registry):
        descriptor = validate_request(_veo("veo-3.0-fast-generate-001"), registry)
        assert descriptor.duration_secs == 8

    def test_image_models_have_no_duration(self, registry):
        descriptor = validate_request(_imagen("imagen-3.0-generate-002"), registry)
        assert descriptor.duration_secs is None


class TestOutputCount:
    """Test output count bounds [1, max_outputs]."""

    def test_bounds_for_every_model(self, registry):
        for family, build in (("veo", _veo), ("imagen", _imagen)):
            for name, info in registry.models(family).items():
                ratio = info.aspect_ratios[0]
                assert validate_request(build(name, output_count=1, aspect_ratio=ratio), registry)
                assert validate_request(build(name, output_count=info.max_outputs, aspect_ratio=ratio), registry)
                for bad in (0, info.max_outputs + 1):
                    with pytest.raises(OutputCountError):
                        validate_request(build(name, output_count=bad, aspect_ratio=ratio), registry)

    def test_error_names_count_field(self, registry):
        with pytest.raises(OutputCountError) as exc:
            validate_request(_imagen("Imagen 4 Ultra", output_count=2), registry)
        assert exc.value.field == "num_images"
        assert exc.value.error == (
            "num_images must be between 1 and 1 for model 'imagen-4.0-ultra-generate-001', got 2"
        )
        assert exc.value.to_dict()["code"] == "OUTPUT_COUNT_OUT_OF_RANGE"

    def test_negative_count(self, registry):
        with pytest.raises(OutputCountError):
            validate_request(_veo("Veo 2", output_count=-1), registry)


class TestAspectRatioAndSize:
    """Test aspect ratio and image size checks."""

    def test_unsupported_ratio(self, registry):
        with pytest.raises(UnsupportedValueError) as exc:
            validate_request(_veo("Veo 3 Fast", aspect_ratio="9:16"), registry)
        assert exc.value.field == "aspect_ratio"
        assert "Supported: 16:9" in exc.value.error

    def test_ratio_checked_before_duration(self, registry):
        """Both ratio and duration are wrong; the ratio is reported."""
        with pytest.raises(UnsupportedValueError) as exc:
            validate_request(_veo("Veo 3 Fast", aspect_ratio="1:1", duration=30), registry)
        assert exc.value.field == "aspect_ratio"

    def test_supported_size(self, registry):
        descriptor = validate_request(_imagen("Imagen 4", image_size="2K"), registry)
        assert descriptor.image_size == "2K"

    def test_unknown_size(self, registry):
        with pytest.raises(UnsupportedValueError) as exc:
            validate_request(_imagen("Imagen 4", image_size="4K"), registry)
        assert exc.value.field == "image_size"

    def test_size_on_model_without_sizes(self, registry):
        with pytest.raises(UnsupportedFeatureError) as exc:
            validate_request(_imagen("Imagen 3", image_size="1K"), registry)
        assert exc.value.field == "image_size"


class TestFeatureGates:
    """Test audio, last frame and reference image gates."""

    def _frame(self):
        return ImageRef(uri="gs://b/last.png", mime_type="image/png")

    def test_audio_supported(self, registry):
        descriptor = validate_request(_veo("Veo 3 Fast", generate_audio=True), registry)
        assert descriptor.generate_audio is True

    def test_audio_rejected(self, registry):
        with pytest.raises(UnsupportedFeatureError) as exc:
            validate_request(_veo("Veo 2", generate_audio=True), registry)
        assert exc.value.error == "Audio generation is not supported on model 'veo-2.0-generate-001'."
        assert exc.value.field == "generate_audio"

    def test_last_frame_rejected_on_non_supporting_models(self, registry):
        for name, info in registry.models("veo").items():
            params = _veo(name, operation="veo_interpolate", last_frame=self._frame(), aspect_ratio="16:9")
            if info.supports_last_frame:
                assert validate_request(params, registry).last_frame == self._frame()
            else:
                with pytest.raises(UnsupportedFeatureError) as exc:
                    validate_request(params, registry)
                assert exc.value.field == "last_frame_uri"

    def test_reference_images_rejected(self, registry):
        params = _veo(
            "Veo 3.1 Fast preview",
            last_frame=self._frame(),
            reference_images_json='[{"uri": "gs://b/r.png", "type": "ASSET"}]',
        )
        with pytest.raises(UnsupportedFeatureError) as exc:
            validate_request(params, registry)
        assert exc.value.field == "reference_images"

    def test_accepted_references_are_frozen(self, registry):
        """The descriptor's reference list cannot be changed after validation."""
        params = _veo(
            "veo-3.1-generate-preview",
            last_frame=self._frame(),
            reference_images_json='[{"uri": "gs://b/r.png", "type": "ASSET"}]',
        )
        descriptor = validate_request(params, registry)
        assert isinstance(descriptor.reference_images, tuple)
        assert [r.uri for r in descriptor.reference_images] == ["gs://b/r.png"]
        with pytest.raises(AttributeError):
            descriptor.reference_images.append(self._frame())
        with pytest.raises(FrozenInstanceError):
            descriptor.reference_images = ()

    def test_gates_run_after_count(self, registry):
        with pytest.raises(OutputCountError):
            validate_request(_veo("Veo 2", output_count=9, generate_audio=True), registry)


class TestModelResolution:
    """Test model lookup through the alias index."""

    def test_alias_replaced_with_canonical(self, registry):
        descriptor = validate_request(_veo("  VEO 3 FAST "), registry)
        assert descriptor.model == "veo-3.0-fast-generate-001"

    def test_unknown_model(self, registry):
        with pytest.raises(UnsupportedModelError) as exc:
            validate_request(_veo("veo-9"), registry)
        assert exc.value.error == "model 'veo-9' is not a valid or supported veo model name"
        assert exc.value.field == "model"

    def test_model_from_other_family(self, registry):
        with pytest.raises(UnsupportedModelError):
            validate_request(_veo("imagen-4.0-generate-001"), registry)

    def test_validate_rejects_mismatched_capability(self, registry):
        capability = registry.lookup("veo", "veo-2.0-generate-001")
        with pytest.raises(UnsupportedModelError):
            validate(_veo("veo-3.0-fast-generate-001"), capability)

    def test_gemini_skips_limits(self, registry):
        params = RequestParameters(operation="gemini_generate", family="gemini", model="nano banana", prompt="hi")
        descriptor = validate_request(params, registry)
        assert descriptor.model == "gemini-2.5-flash-image"
        assert descriptor.output_count is None
