"""Tests for POST /api/generate-image."""

from unittest.mock import AsyncMock


class TestGenerateImage:
    """Tests for the single illustration endpoint."""

    def test_missing_text_returns_400(self, client_with_mocks, online_mode):
        client, _, _, _ = client_with_mocks

        response = client.post("/api/generate-image", json={"imageModel": "qwen-image"})

        assert response.status_code == 400
        assert response.json() == {"error": "Text is required for image generation."}

    def test_disallowed_model_returns_400(self, client_with_mocks, online_mode):
        client, mock_venice, _, _ = client_with_mocks

        response = client.post("/api/generate-image", json={"text": "a fox", "imageModel": "sdxl-nsfw"})

        assert response.status_code == 400
        assert response.json() == {"error": "Please select a permitted safe Venice.ai image model."}
        mock_venice.generate_image.assert_not_called()

    def test_numeric_image_model_returns_400(self, client_with_mocks, online_mode):
        client, mock_venice, _, _ = client_with_mocks

        response = client.post("/api/generate-image", json={"text": "a fox", "imageModel": 7})

        assert response.status_code == 400
        assert response.json() == {"error": "Please select a permitted safe Venice.ai image model."}
        mock_venice.generate_image.assert_not_called()

    def test_generates_structured_image(self, client_with_mocks, online_mode):
        client, mock_venice, _, fake_lm = client_with_mocks
        fake_lm.responses.append({"style": "Old cartoon style", "characters": "a fox", "scene": "a barn"})
        mock_venice.generate_image = AsyncMock(return_value="https://cdn.venice.test/fox.png")

        response = client.post(
            "/api/generate-image",
            json={
                "text": "The fox dances in the barn",
                "artStyle": "Old cartoon",
                "imageModel": "venice-sd35",
                "isCover": True,
                "title": "Fox Dance",
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["imageUrl"] == "https://cdn.venice.test/fox.png"
        assert data["finalPrompt"] == "Style: Old cartoon style. Characters: a fox. Scene: a barn"
        assert data["structuredPrompt"] == {"style": "Old cartoon style", "characters": "a fox", "scene": "a barn"}
        assert "fallback" not in data

        payload = mock_venice.generate_image.call_args.args[0]
        assert payload["size"] == "1792x1024"
        assert payload["model"] == "venice-sd35"
        assert payload["safe_mode"] is True

    def test_upstream_failure_returns_500(self, client_with_mocks, online_mode):
        client, mock_venice, _, fake_lm = client_with_mocks
        fake_lm.responses.append({"style": "s", "characters": "c", "scene": "x"})
        mock_venice.generate_image = AsyncMock(side_effect=RuntimeError("quota exceeded"))

        response = client.post("/api/generate-image", json={"text": "a fox", "imageModel": "hidream"})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to generate image.", "details": "quota exceeded"}

    def test_offline_mode_returns_placeholder(self, client_with_mocks, offline_mode):
        client, mock_venice, _, _ = client_with_mocks

        response = client.post("/api/generate-image", json={"text": "a fox", "imageModel": "hidream"})

        assert response.status_code == 200
        data = response.json()
        assert data["fallback"] is True
        assert data["imageUrl"].startswith("data:image/svg+xml;utf8,")
        assert data["finalPrompt"] == "a fox"
        mock_venice.generate_image.assert_not_called()
