"""Controller for the zero-shot image classification flow."""

import itertools
import logging
from typing import Optional

from models.vision_models import (
    ClassificationEmpty,
    ClassificationOk,
    ClassificationResult,
)
from models.view_state import ViewState
from services.openai.model_gateway import ModelGateway
from services.thumbnail_generator import ThumbnailGenerator
from utils.errors import InvalidInputKind
from utils.media_validation import ImageUpload, encode_upload, ensure_image_media_type

LOGGER = logging.getLogger(__name__)

INVALID_FILE_MESSAGE = "Please upload a valid image file."
ANALYSIS_FAILED_MESSAGE = "Failed to analyze image. Please try again or check your API key."


class ClassificationFlow:
    """Hold the classification view state and drive it from file selections.

    Flow: idle -> loading -> success | empty | failed. A new selection always
    restarts the flow. Overlapping selections are ordered by a request
    sequence number; only the most recently issued request may update state.
    """

    def __init__(self, gateway: ModelGateway, preview_generator: Optional[ThumbnailGenerator] = None) -> None:
        if gateway is None:
            raise ValueError("Model gateway must be provided.")
        self.gateway = gateway
        self.preview_generator = preview_generator or ThumbnailGenerator()
        self._state: ViewState[ClassificationResult] = ViewState.idle()
        self._sequence = itertools.count(1)
        self._latest_request = 0

    @property
    def state(self) -> ViewState[ClassificationResult]:
        return self._state

    def reset(self) -> ViewState[ClassificationResult]:
        self._latest_request = next(self._sequence)
        self._state = ViewState.idle()
        return self._state

    async def select_file(self, upload: ImageUpload) -> ViewState[ClassificationResult]:
        """Validate, encode, and classify a newly selected file.

        Args:
            upload: The selected file (FastAPI `UploadFile` or equivalent).

        Returns:
            The flow state after this request settles (which may reflect a
            newer request if one was issued in the meantime).
        """
        request_id = next(self._sequence)
        self._latest_request = request_id

        try:
            ensure_image_media_type(upload.content_type)
        except InvalidInputKind as exc:
            LOGGER.info("Rejected upload '%s': %s", upload.filename, exc)
            self._state = ViewState.failed(INVALID_FILE_MESSAGE)
            return self._state

        self._state = ViewState.loading()
        preview: Optional[str] = None
        try:
            payload = await encode_upload(upload)
            preview = self._render_preview(payload)
            self._apply(request_id, ViewState.loading(preview))
            outcome = await self.gateway.classify(payload)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            LOGGER.error("Image classification failed: %s: %s", type(exc).__name__, exc)
            self._apply(request_id, ViewState.failed(ANALYSIS_FAILED_MESSAGE, preview))
            return self._state

        if isinstance(outcome, ClassificationOk):
            self._apply(request_id, ViewState.success(outcome.result, preview))
        elif isinstance(outcome, ClassificationEmpty):
            self._apply(request_id, ViewState.empty(preview))
        else:
            LOGGER.error("Image classification failed: %s", outcome.error)
            self._apply(request_id, ViewState.failed(ANALYSIS_FAILED_MESSAGE, preview))
        return self._state

    def _render_preview(self, payload) -> Optional[str]:
        try:
            return self.preview_generator.create_preview(payload)
        except ValueError as exc:
            LOGGER.warning("Could not render image preview: %s", exc)
            return None

    def _apply(self, request_id: int, state: ViewState[ClassificationResult]) -> None:
        if request_id != self._latest_request:
            LOGGER.debug("Discarding stale classification state for request %d", request_id)
            return
        self._state = state
