"""
Image-model safety gate.

Only allow-listed image models may be requested. Every outbound image
request is forced into safe mode with a visible watermark, and requests for
models outside the allow-list are rewritten to the default model.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SafeImageModel:
    """An image model approved for children's content."""

    id: str
    label: str
    prompt_character_limit: int = 1400


# Order matters: model listings are returned in this order
SAFE_IMAGE_MODELS: dict[str, SafeImageModel] = {
    model.id: model
    for model in (
        SafeImageModel(id="qwen-image", label="Qwen Image"),
        SafeImageModel(id="venice-sd35", label="Venice SD35"),
        SafeImageModel(id="hidream", label="HiDream"),
    )
}

SAFE_IMAGE_MODEL_IDS: tuple[str, ...] = tuple(SAFE_IMAGE_MODELS)

DEFAULT_SAFE_IMAGE_MODEL = "qwen-image"

# Used for models we know nothing about: the strictest configured limit
DEFAULT_PROMPT_CHARACTER_LIMIT = min(
    (model.prompt_character_limit for model in SAFE_IMAGE_MODELS.values()),
    default=1400,
)


def normalize_model_id(model_id) -> str:
    """Strip whitespace from string ids; anything else becomes an empty id."""
    return model_id.strip() if isinstance(model_id, str) else ""


def is_allowed_image_model(model_id) -> bool:
    """Check whether a requested image model is on the allow-list."""
    return normalize_model_id(model_id) in SAFE_IMAGE_MODELS


def enforce_safe_image_model(model_id) -> str:
    """Return the normalized id if allowed, otherwise the default safe model."""
    if is_allowed_image_model(model_id):
        return normalize_model_id(model_id)
    return DEFAULT_SAFE_IMAGE_MODEL


def build_safe_image_payload(payload: dict = None, requested_model_id=None) -> dict:
    """
    Build an image generation payload with safety flags forced on.

    The model, safe_mode and hide_watermark keys always override whatever
    the incoming payload carries.
    """
    return {
        **(payload or {}),
        "model": enforce_safe_image_model(requested_model_id),
        "safe_mode": True,
        "hide_watermark": False,
    }


def get_prompt_character_limit(model_id) -> int:
    """Get the prompt character limit for a model."""
    model = SAFE_IMAGE_MODELS.get(normalize_model_id(model_id))
    if model is not None:
        return model.prompt_character_limit
    return DEFAULT_PROMPT_CHARACTER_LIMIT


def truncate_prompt(prompt: str, limit: int) -> str:
    """Cut a prompt down to at most `limit` characters (never below 1)."""
    return prompt[: max(1, limit)]
