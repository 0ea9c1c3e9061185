"""
Tests for reference image parsing

Bad entries are skipped with a warning log; only malformed JSON rejects the
request.
"""

import json

import pytest

from core.errors import MalformedInputError
from genmedia_mcp.model_registry import ModelCapability
from genmedia_mcp.reference_images import parse_reference_images
from genmedia_mcp.types import ReferenceType


@pytest.fixture
def both_types():
    return ModelCapability(
        canonical_name="ref-model",
        family="veo",
        supports_reference_images=True,
        reference_types=("ASSET", "STYLE"),
    )


def _skips(capturing_logger):
    return [log for log in capturing_logger.get_json_logs() if log["message"] == "reference_image_skipped"]


class TestParseReferenceImages:
    """Test well-formed input."""

    def test_empty(self, both_types):
        assert parse_reference_images("", both_types) == []
        assert parse_reference_images("   ", both_types) == []
        assert parse_reference_images("[]", both_types) == []

    def test_valid_entries_in_order(self, both_types):
        raw = json.dumps(
            [
                {"uri": "gs://b/one.png", "type": "ASSET"},
                {"uri": "gs://b/two.jpg", "type": "style"},
            ]
        )
        refs = parse_reference_images(raw, both_types)
        assert [r.uri for r in refs] == ["gs://b/one.png", "gs://b/two.jpg"]
        assert refs[0].mime_type == "image/png"
        assert refs[1].mime_type == "image/jpeg"
        assert refs[1].role is ReferenceType.STYLE
        assert refs[1].to_dict() == {"uri": "gs://b/two.jpg", "mime_type": "image/jpeg", "type": "STYLE"}

    def test_hash_in_object_name(self, both_types):
        """Object names may contain '#'; the suffix still decides the MIME type."""
        refs = parse_reference_images(json.dumps([{"uri": "gs://b/shot#1.png", "type": "ASSET"}]), both_types)
        assert [r.to_dict() for r in refs] == [{"uri": "gs://b/shot#1.png", "mime_type": "image/png", "type": "ASSET"}]


class TestSkippedEntries:
    """Test per-entry problems drop only that entry."""

    def test_bad_entries_skipped(self, both_types, capturing_logger):
        raw = json.dumps(
            [
                {"uri": "https://example.com/a.png", "type": "ASSET"},
                {"uri": "gs://b/a.gif", "type": "ASSET"},
                {"uri": "gs://b/a.png", "type": "MASK"},
                {"uri": "gs://b/a.png"},
                {"uri": "gs://b/keep.png", "type": "asset"},
            ]
        )
        refs = parse_reference_images(raw, both_types)
        assert [r.uri for r in refs] == ["gs://b/keep.png"]

        reasons = [log["reason"] for log in _skips(capturing_logger)]
        assert reasons == ["invalid_uri", "unknown_mime_type", "invalid_type", "invalid_type"]
        assert all(log["level"] == "WARNING" for log in _skips(capturing_logger))

    def test_style_skipped_on_asset_only_model(self, registry, capturing_logger):
        """veo-3.1-generate-preview takes asset references only."""
        capability = registry.lookup("veo", "veo-3.1-generate-preview")
        raw = json.dumps(
            [
                {"uri": "gs://b/style.png", "type": "STYLE"},
                {"uri": "gs://b/asset.png", "type": "ASSET"},
            ]
        )
        refs = parse_reference_images(raw, capability)
        assert [r.uri for r in refs] == ["gs://b/asset.png"]

        skips = _skips(capturing_logger)
        assert len(skips) == 1
        assert skips[0]["reason"] == "type_not_supported_by_model"
        assert skips[0]["model"] == "veo-3.1-generate-preview"

    def test_all_skipped_is_empty_not_error(self, both_types):
        raw = json.dumps([{"uri": "nope", "type": "ASSET"}])
        assert parse_reference_images(raw, both_types) == []


class TestMalformedInput:
    """Test input that rejects the whole request."""

    def test_not_json(self, both_types):
        with pytest.raises(MalformedInputError) as exc:
            parse_reference_images("[{uri: gs://b/a.png}", both_types)
        assert exc.value.field == "reference_images"
        assert exc.value.to_dict()["code"] == "MALFORMED_INPUT"

    def test_not_an_array(self, both_types):
        with pytest.raises(MalformedInputError):
            parse_reference_images('{"uri": "gs://b/a.png", "type": "ASSET"}', both_types)

    def test_entry_not_an_object(self, both_types):
        with pytest.raises(MalformedInputError, match="entry 1"):
            parse_reference_images('[{"uri": "gs://b/a.png", "type": "ASSET"}, "gs://b/b.png"]', both_types)
