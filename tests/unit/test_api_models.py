"""Tests for GET /api/models and GET|POST /api/test."""

from unittest.mock import AsyncMock

from storybook.core.venice import VeniceAPIError

TEXT_MODELS = [
    {"id": "mistral-31-24b", "model_spec": {"name": "Mistral"}},
    {"id": "retired-model", "model_spec": {"name": "Old", "offline": True}},
    {"id": "no-spec"},
]

IMAGE_MODELS = [
    {"id": "hidream", "model_spec": {"name": "HiDream"}},
    {"id": "lustify-sdxl", "model_spec": {"name": "Lustify"}},
    {"id": "venice-sd35", "model_spec": {"name": "SD35", "offline": True}},
    {"id": "qwen-image", "model_spec": {"name": "Qwen"}},
]


def _list_models(model_type="text", timeout=None):
    return TEXT_MODELS if model_type == "text" else IMAGE_MODELS


class TestListModels:
    """Tests for the model listing endpoint."""

    def test_filters_and_orders_models(self, client_with_mocks, online_mode):
        client, mock_venice, _, _ = client_with_mocks
        mock_venice.list_models = AsyncMock(side_effect=_list_models)

        response = client.get("/api/models")

        assert response.status_code == 200
        data = response.json()
        assert [m["id"] for m in data["textModels"]] == ["mistral-31-24b"]
        # Allow-list order, offline and unknown models removed
        assert [m["id"] for m in data["imageModels"]] == ["qwen-image", "hidream"]
        assert "fallback" not in data

    def test_upstream_failure_returns_500(self, client_with_mocks, online_mode):
        client, mock_venice, _, _ = client_with_mocks
        mock_venice.list_models = AsyncMock(side_effect=VeniceAPIError("boom", status_code=502))

        response = client.get("/api/models")

        assert response.status_code == 500
        assert response.json() == {"error": "Could not fetch models from Venice.ai"}

    def test_offline_mode_returns_fallback_models(self, client_with_mocks, offline_mode):
        client, mock_venice, _, _ = client_with_mocks

        response = client.get("/api/models")

        assert response.status_code == 200
        data = response.json()
        assert data["fallback"] is True
        assert data["textModels"][0]["id"] == "mock-storyteller"
        assert data["imageModels"][0]["id"] == "qwen-image"
        mock_venice.list_models.assert_not_called()


class TestDiagnostics:
    """Tests for the connectivity test endpoint."""

    def test_simple_check(self, client_with_mocks, online_mode):
        client, mock_venice, _, _ = client_with_mocks

        response = client.get("/api/test?simple=true")

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Storybook server is working!"
        assert data["fallback"] is False
        assert data["timestamp"].endswith("Z")
        assert data["pythonVersion"]
        mock_venice.list_models.assert_not_called()

    def test_offline_check(self, client_with_mocks, offline_mode):
        client, _, _, _ = client_with_mocks

        response = client.post("/api/test")

        assert response.status_code == 200
        assert response.json()["fallback"] is True
        assert "Offline fallback mode active" in response.json()["message"]

    def test_lists_sample_models(self, client_with_mocks, online_mode):
        client, mock_venice, _, _ = client_with_mocks
        mock_venice.list_models = AsyncMock(return_value=[{"id": f"model-{n}"} for n in range(5)])

        response = client.post("/api/test")

        assert response.status_code == 200
        assert response.json() == {
            "message": "Venice.ai API is working!",
            "modelsCount": 5,
            "sampleModels": ["model-0", "model-1", "model-2"],
        }

    def test_failure_returns_500(self, client_with_mocks, online_mode):
        client, mock_venice, _, _ = client_with_mocks
        mock_venice.list_models = AsyncMock(side_effect=VeniceAPIError("Authentication failed", 401))

        response = client.get("/api/test")

        assert response.status_code == 500
        assert response.json() == {"error": "Test failed", "details": "Authentication failed"}
