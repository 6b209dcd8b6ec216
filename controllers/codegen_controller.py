"""Controller for the training-script generation flow."""

import logging
from typing import Any, Mapping, Optional

from models.codegen_models import CodeGenConfig
from models.view_state import ViewState, displayed_script
from services.openai.model_gateway import ModelGateway

LOGGER = logging.getLogger(__name__)

GENERATION_FAILED_SCRIPT = "# Error generating code. Please check API key and try again."


class CodeGenerationFlow:
    """Hold the generator configuration and the generated script.

    The configuration stays editable in every state. Each generation uses a
    snapshot of the configuration taken when it is triggered; triggering
    again while a generation is running does nothing.
    """

    def __init__(self, gateway: ModelGateway, config: Optional[CodeGenConfig] = None) -> None:
        if gateway is None:
            raise ValueError("Model gateway must be provided.")
        self.gateway = gateway
        self.config = config or CodeGenConfig()
        self._state: ViewState[str] = ViewState.idle()

    @property
    def state(self) -> ViewState[str]:
        return self._state

    @property
    def script(self) -> str:
        return displayed_script(self._state)

    def update_config(self, changes: Mapping[str, Any]) -> CodeGenConfig:
        """Apply field edits; invalid values raise ValueError and leave the config untouched."""
        self.config = self.config.with_changes(changes)
        return self.config

    def reset_config(self) -> CodeGenConfig:
        self.config = CodeGenConfig()
        return self.config

    async def generate(self) -> ViewState[str]:
        """Request a training script for the current configuration."""
        if self._state.is_loading:
            LOGGER.info("Generation already in progress; ignoring trigger.")
            return self._state

        snapshot = self.config.model_copy()
        self._state = ViewState.loading()
        try:
            script = await self.gateway.generate_training_script(snapshot)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            LOGGER.error("Training script generation failed: %s: %s", type(exc).__name__, exc)
            self._state = ViewState.failed(GENERATION_FAILED_SCRIPT)
            return self._state

        self._state = ViewState.success(script)
        return self._state
