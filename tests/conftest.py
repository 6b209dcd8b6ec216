from __future__ import annotations

import base64
import json

import pytest

from services.openai.model_gateway import ModelGateway
from tests.fakes import CAT_RESULT, FakeClient, function_call_response, png_bytes
from utils.settings import Settings


@pytest.fixture
def settings() -> Settings:
    return Settings(openai_api_key="test-key", vision_model="vision-test", code_model="code-test")


@pytest.fixture
def cat_client() -> FakeClient:
    return FakeClient(result=function_call_response(json.dumps(CAT_RESULT)))


@pytest.fixture
def cat_gateway(settings, cat_client) -> ModelGateway:
    return ModelGateway(settings, client=cat_client)


@pytest.fixture
def b64_png() -> str:
    return base64.b64encode(png_bytes()).decode("ascii")
