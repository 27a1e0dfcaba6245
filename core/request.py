"""Inbound generation request validation.

Runs before any stage: a request that fails here never reaches the
orchestrator.
"""

from config.defaults import DEFAULTS
from core.errors import ValidationError
from core.state import GenerationConfig, ImageInput


def _non_whitespace_len(text):
    return len("".join(text.split()))


def parse_generation_request(body):
    """Validate a JSON body and return (config, image or None).

    Exactly one of ``image_base64`` and ``config.text_prompt`` must be
    present. Raises ValidationError otherwise.
    """
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")

    raw_config = body.get("config")
    if not isinstance(raw_config, dict):
        raise ValidationError("Missing config")
    # Allow the prompt at the top level too
    if body.get("text_prompt") and not (raw_config.get("text_prompt") or raw_config.get("textPrompt")):
        raw_config = dict(raw_config, text_prompt=body["text_prompt"])

    config = GenerationConfig.from_dict(raw_config)

    image_data = body.get("image_base64") or body.get("imageBase64") or ""
    if not isinstance(image_data, str):
        raise ValidationError("image_base64 must be a string")
    has_image = bool(image_data.strip())
    has_text = bool(config.text_prompt)

    if has_image and has_text:
        raise ValidationError("Provide either an image or a text prompt, not both")
    if not has_image and not has_text:
        raise ValidationError("Provide an image or a text prompt")

    if has_text:
        if _non_whitespace_len(config.text_prompt) < DEFAULTS["min_prompt_chars"]:
            raise ValidationError(
                f"Text prompt must be at least {DEFAULTS['min_prompt_chars']} characters"
            )
        return config, None

    mime_type = body.get("mime_type") or body.get("mimeType")
    if mime_type is not None and not isinstance(mime_type, str):
        raise ValidationError("mime_type must be a string")
    image = ImageInput.from_base64(image_data, mime_type)
    if len(image.data) <= DEFAULTS["min_image_chars"]:
        raise ValidationError("Image data is too small to be a sketch")
    return config, image


def validate_edit_request(existing_code, command):
    """Size checks for an edit. Raises ValidationError."""
    command = (command or "").strip()
    if not existing_code or not existing_code.strip():
        raise ValidationError("Missing existing code")
    if len(command) < DEFAULTS["edit_min_command"]:
        raise ValidationError(f"Command must be at least {DEFAULTS['edit_min_command']} characters")
    if len(command) > DEFAULTS["edit_max_command"]:
        raise ValidationError(f"Command must be at most {DEFAULTS['edit_max_command']} characters")
    if len(existing_code) > DEFAULTS["edit_max_code"]:
        raise ValidationError(f"Code must be at most {DEFAULTS['edit_max_code']} characters")
    return command
