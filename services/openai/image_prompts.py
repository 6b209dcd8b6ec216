"""Prompt builders for zero-shot image classification."""


def build_system_prompt() -> str:
    """Return the system prompt for the classifier."""
    return (
        "You are a computer vision assistant helping to label images for an image classification dataset. "
        "Report your analysis only through the provided tool."
    )


def build_user_prompt() -> str:
    """Return the fixed analysis instruction sent with every image."""
    return (
        "Analyze this image for an image classification dataset.\n"
        "1. Identify the primary subject (the 'Label').\n"
        "2. Estimate a confidence score (0-100) based on image clarity.\n"
        "3. Provide a brief visual description useful for captioning.\n"
        "4. Suggest 3-5 tags/keywords."
    )
