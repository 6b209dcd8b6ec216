"""Schema definition for the image classification tool."""

from typing import Any, Dict

FUNCTION_NAME = "report_image_classification"

FUNCTION_DEFINITION: Dict[str, Any] = {
    "type": "function",
    "name": FUNCTION_NAME,
    "description": (
        "Return the primary subject label, a confidence score, a short caption, and keyword tags for the image."
    ),
    "parameters": {
        "type": "object",
        "properties": {
            "label": {
                "type": "string",
                "description": "The primary subject of the image.",
            },
            "confidence": {
                "type": "number",
                "description": "Confidence score from 0 to 100 reflecting image clarity.",
            },
            "description": {
                "type": "string",
                "description": "A brief visual description useful for captioning.",
            },
            "suggestedTags": {
                "type": "array",
                "description": "Three to five keywords describing the image.",
                "items": {"type": "string"},
            },
        },
        "required": ["label", "confidence", "description", "suggestedTags"],
        "additionalProperties": False,
    },
    "strict": True,
}
