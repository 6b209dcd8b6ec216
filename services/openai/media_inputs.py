"""Utilities to build multimodal input payloads for the Responses API."""

from typing import Any, Dict, List

from models.vision_models import ImagePayload


def build_inputs(system_prompt: str, user_prompt: str, payload: ImagePayload) -> List[Dict[str, Any]]:
    """Build the Responses API input array: system prompt, instruction, then the image."""
    return [
        {
            "type": "message",
            "role": "system",
            "content": [{"type": "input_text", "text": system_prompt}],
        },
        {
            "type": "message",
            "role": "user",
            "content": [
                {"type": "input_text", "text": user_prompt},
                {"type": "input_image", "image_url": payload.as_data_url()},
            ],
        },
    ]
