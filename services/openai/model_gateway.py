"""Gateway to the hosted generative models, built on OpenAI's Responses API.

The gateway owns the async client and the two request/response contracts the
application uses: zero-shot image classification with a structured tool
output, and free-form training-script generation. Settings are injected at
construction; the credential is checked on every call before any client is
built or any request leaves the process.
"""

import inspect
import logging
import time
from typing import Any, Dict, Optional

from openai import AsyncOpenAI

from models.codegen_models import CodeGenConfig
from models.vision_models import (
    ClassificationOk,
    ClassificationOutcome,
    ClassificationParseError,
    ImagePayload,
)
from services.openai.codegen_prompts import build_training_script_prompt
from services.openai.image_prompts import build_system_prompt, build_user_prompt
from services.openai.image_schema import FUNCTION_DEFINITION, FUNCTION_NAME
from services.openai.media_inputs import build_inputs
from services.openai.response_parser import (
    extract_function_arguments,
    extract_output_text,
    extract_usage,
    parse_classification,
    strip_code_fences,
)
from utils.errors import ConfigurationError, ResponseFormatError, ServiceCallFailure
from utils.settings import Settings

LOGGER = logging.getLogger(__name__)


class ModelGateway:
    """Issue classification and code generation requests to the model service."""

    def __init__(self, settings: Settings, client: Optional[AsyncOpenAI] = None) -> None:
        """Initialize the gateway.

        Args:
            settings: Explicit configuration, including the API credential.
            client: Optional preconfigured async client (dependency injection for tests).
                When omitted, one is created on the first authorised call.
        """
        if settings is None:
            raise ValueError("Settings must be provided.")
        self.settings = settings
        self._client = client
        self.system_prompt = build_system_prompt()
        self.user_prompt = build_user_prompt()

    def _resolve_client(self) -> AsyncOpenAI:
        """Return a usable client, failing fast when no credential is configured."""
        if not self.settings.has_credential:
            raise ConfigurationError("missing credential: OPENAI_API_KEY is not set")
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self.settings.openai_api_key)
        return self._client

    async def classify(self, payload: ImagePayload) -> ClassificationOutcome:
        """Classify an image and return a tagged outcome.

        Returns:
            `ClassificationOk`, `ClassificationEmpty` when the service answered
            without content, or `ClassificationParseError` when the structured
            output does not match the expected shape.

        Raises:
            ConfigurationError: No credential is configured.
            ServiceCallFailure: The request itself failed.
        """
        client = self._resolve_client()
        start_time = time.time()

        inputs = build_inputs(self.system_prompt, self.user_prompt, payload)
        response = await self._create_response(
            client,
            model=self.settings.vision_model,
            input=inputs,
            tools=[FUNCTION_DEFINITION],
            tool_choice={"type": "function", "name": FUNCTION_NAME},
        )

        outcome = parse_classification(extract_function_arguments(response, tool_name=FUNCTION_NAME))
        if isinstance(outcome, ClassificationParseError):
            LOGGER.error("Unexpected classification output: %s", outcome.error)
        elif not isinstance(outcome, ClassificationOk):
            LOGGER.warning("Model service returned no classification content.")

        self._log_call("Classification", start_time, response)
        return outcome

    async def generate_training_script(self, config: CodeGenConfig) -> str:
        """Generate a training script for the given configuration.

        Raises:
            ConfigurationError: No credential is configured.
            ServiceCallFailure: The request itself failed.
            ResponseFormatError: The service returned no text.
        """
        client = self._resolve_client()
        start_time = time.time()

        prompt = build_training_script_prompt(config)
        response = await self._create_response(client, model=self.settings.code_model, input=prompt)

        text = extract_output_text(response)
        if text is None or not text.strip():
            raise ResponseFormatError("Model service returned no text for the training script.")

        self._log_call("Training script generation", start_time, response)
        return strip_code_fences(text)

    async def _create_response(self, client: AsyncOpenAI, **request: Any) -> Any:
        """Send a request to the Responses API, classifying any failure."""
        try:
            return await client.responses.create(**request)
        except Exception as exc:
            # The exception text may echo request details; only its type is surfaced.
            LOGGER.error("Error during Responses API call (%s): %s", request.get("model"), type(exc).__name__)
            raise ServiceCallFailure(f"Model service call failed ({type(exc).__name__}).") from exc

    @staticmethod
    def _log_call(kind: str, start_time: float, response: Any) -> None:
        usage: Dict[str, Optional[int]] = extract_usage(response)
        LOGGER.info(
            "%s latency: %.3fs (input_tokens=%s, output_tokens=%s)",
            kind,
            time.time() - start_time,
            usage["input_tokens"],
            usage["output_tokens"],
        )

    async def aclose(self) -> None:
        """Close the underlying client if one was created."""
        client = self._client
        if client is None:
            return
        close = getattr(client, "close", None) or getattr(client, "aclose", None)
        if close is None:
            return
        result = close()
        if inspect.isawaitable(result):
            await result
