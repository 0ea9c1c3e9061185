"""
Tests for the MCP tool surface.

Tool functions are called directly; FastMCP registration leaves them plain
callables.
"""

from genmedia_mcp import server


class TestDiscoveryTools:
    """Test list_models, get_model_capabilities and resolve_model."""

    def test_list_models(self):
        result = server.list_models("gemini")
        assert result["family"] == "gemini"
        assert result["models"] == [
            "gemini-2.5-flash-image",
            "gemini-3-pro-image-preview",
            "gemini-3-pro-preview",
        ]
        assert result["description"].startswith("Model for content generation.")

    def test_list_models_unknown_family(self):
        result = server.list_models("audio")
        assert result["isError"] is True
        assert result["code"] == "VALIDATION_ERROR"

    def test_get_model_capabilities_by_alias(self):
        result = server.get_model_capabilities("veo 3 fast")
        assert result["canonical_name"] == "veo-3.0-fast-generate-001"
        assert result["durations"] == [4, 6, 8]
        assert result["supports_audio"] is True

    def test_get_model_capabilities_not_found(self):
        result = server.get_model_capabilities("Sora")
        assert result["code"] == "NOT_FOUND"

    def test_resolve_model(self):
        assert server.resolve_model("Imagen4 Ultra", "imagen") == {
            "input": "Imagen4 Ultra",
            "family": "imagen",
            "canonical_name": "imagen-4.0-ultra-generate-001",
            "found": True,
        }


class TestPlanningTools:
    """Test plan_* tools return descriptors or error dicts."""

    def test_plan_veo_t2v(self):
        result = server.plan_veo_t2v(
            "a fox", model="Veo 3 Fast", duration=8, aspect_ratio="16:9", bucket="gs://b/out/"
        )
        assert result["model"] == "veo-3.0-fast-generate-001"
        assert result["duration_secs"] == 8
        assert result["storage_uri"] == "gs://b/out/"

    def test_plan_veo_t2v_rejected(self):
        result = server.plan_veo_t2v("a fox", model="Veo 3 Fast", duration=10, bucket="gs://b/out/")
        assert result["isError"] is True
        assert result["code"] == "UNSUPPORTED_VALUE"
        assert result["details"]["field"] == "duration"

    def test_plan_veo_t2v_missing_bucket(self):
        result = server.plan_veo_t2v("a fox")
        assert result["code"] == "MISSING_PARAMETER"
        assert result["details"]["field"] == "bucket"

    def test_plan_veo_i2v_default_bucket(self, monkeypatch):
        monkeypatch.setenv("GENMEDIA_BUCKET", "tool-bucket")
        result = server.plan_veo_i2v("gs://b/cat.png")
        assert result["storage_uri"] == "gs://tool-bucket/veo_outputs/"
        assert result["image"]["mime_type"] == "image/png"

    def test_plan_veo_interpolate_bad_reference_json(self):
        result = server.plan_veo_interpolate(
            "gs://b/first.png",
            "gs://b/last.png",
            reference_images="[{",
            model="Veo 3.1 preview",
            bucket="gs://b/out/",
        )
        assert result["code"] == "MALFORMED_INPUT"

    def test_plan_imagen_t2i(self):
        result = server.plan_imagen_t2i("a fox", model="Imagen 4", num_images=5)
        assert result["code"] == "OUTPUT_COUNT_OUT_OF_RANGE"
        assert result["details"]["field"] == "num_images"

    def test_plan_gemini_generate(self):
        result = server.plan_gemini_generate("hello", model="Gemini 3 Pro")
        assert result["model"] == "gemini-3-pro-preview"


class TestResources:
    """Test model listing resources."""

    def test_resources_match_describe(self):
        assert server.resource_models_veo().startswith("Model for video generation.")
        assert server.resource_models_imagen().startswith("Model for image generation.")
        assert server.resource_models_gemini().startswith("Model for content generation.")
