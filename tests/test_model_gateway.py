import json

import pytest

from models.codegen_models import CodeGenConfig
from models.vision_models import (
    ClassificationEmpty,
    ClassificationOk,
    ClassificationParseError,
    ImagePayload,
)
from services.openai.image_schema import FUNCTION_DEFINITION, FUNCTION_NAME
from services.openai.model_gateway import ModelGateway
from tests.fakes import CAT_RESULT, FakeClient, function_call_response, text_response
from utils.errors import ConfigurationError, ResponseFormatError, ServiceCallFailure
from utils.settings import Settings

PAYLOAD = ImagePayload(encoded_data="QUJD", media_type="image/jpeg")

FLOWERS_CONFIG = CodeGenConfig(
    framework="PyTorch",
    dataset_name="flowers",
    num_classes=5,
    image_size=224,
    batch_size=32,
    epochs=10,
    use_transfer_learning=True,
    base_model="ResNet50",
)


@pytest.mark.asyncio
async def test_classify_builds_structured_multimodal_request(cat_gateway, cat_client):
    outcome = await cat_gateway.classify(PAYLOAD)

    assert isinstance(outcome, ClassificationOk)
    assert outcome.result.label == "cat"

    assert len(cat_client.responses.calls) == 1
    request = cat_client.responses.calls[0]
    assert request["model"] == "vision-test"
    assert request["tools"] == [FUNCTION_DEFINITION]
    assert request["tool_choice"] == {"type": "function", "name": FUNCTION_NAME}

    user_content = request["input"][-1]["content"]
    assert {"type": "input_image", "image_url": "data:image/jpeg;base64,QUJD"} in user_content
    instruction = user_content[0]["text"]
    assert "confidence score (0-100)" in instruction
    assert "3-5 tags" in instruction


def test_schema_declares_exactly_four_fields():
    parameters = FUNCTION_DEFINITION["parameters"]
    assert set(parameters["properties"]) == {"label", "confidence", "description", "suggestedTags"}
    assert parameters["required"] == ["label", "confidence", "description", "suggestedTags"]
    assert parameters["properties"]["suggestedTags"]["items"] == {"type": "string"}


@pytest.mark.asyncio
async def test_classify_reports_empty_content(settings):
    client = FakeClient(result=function_call_response(None))
    outcome = await ModelGateway(settings, client=client).classify(PAYLOAD)
    assert isinstance(outcome, ClassificationEmpty)


@pytest.mark.asyncio
async def test_classify_reports_malformed_content(settings):
    client = FakeClient(result=function_call_response(json.dumps({"label": "cat"})))
    outcome = await ModelGateway(settings, client=client).classify(PAYLOAD)
    assert isinstance(outcome, ClassificationParseError)
    assert isinstance(outcome.error, ResponseFormatError)


@pytest.mark.asyncio
async def test_classify_wraps_service_errors_without_leaking_details(settings):
    client = FakeClient(error=ConnectionError("boom with test-key inside"))

    with pytest.raises(ServiceCallFailure) as excinfo:
        await ModelGateway(settings, client=client).classify(PAYLOAD)

    assert "test-key" not in str(excinfo.value)
    assert "ConnectionError" in str(excinfo.value)


@pytest.mark.asyncio
async def test_generate_training_script_strips_fences(settings):
    client = FakeClient(result=text_response("```python\ncode_here\n```"))

    script = await ModelGateway(settings, client=client).generate_training_script(FLOWERS_CONFIG)

    assert script == "code_here\n"
    assert len(client.responses.calls) == 1
    request = client.responses.calls[0]
    assert request["model"] == "code-test"
    assert "tools" not in request
    assert "ResNet50" in request["input"]
    assert '"flowers"' in request["input"]


@pytest.mark.asyncio
@pytest.mark.parametrize("text", [None, "", "  \n"])
async def test_generate_training_script_rejects_empty_text(settings, text):
    client = FakeClient(result=text_response(text))
    with pytest.raises(ResponseFormatError):
        await ModelGateway(settings, client=client).generate_training_script(FLOWERS_CONFIG)


@pytest.mark.asyncio
async def test_generate_training_script_wraps_service_errors(settings):
    client = FakeClient(error=TimeoutError("slow"))
    with pytest.raises(ServiceCallFailure):
        await ModelGateway(settings, client=client).generate_training_script(FLOWERS_CONFIG)


@pytest.mark.asyncio
@pytest.mark.parametrize("api_key", [None, "", "   "])
async def test_missing_credential_fails_before_any_call(api_key, cat_client):
    gateway = ModelGateway(Settings(openai_api_key=api_key), client=cat_client)

    with pytest.raises(ConfigurationError):
        await gateway.classify(PAYLOAD)
    with pytest.raises(ConfigurationError):
        await gateway.generate_training_script(CodeGenConfig())

    assert len(cat_client.responses.calls) == 0


@pytest.mark.asyncio
async def test_aclose_closes_injected_client(cat_gateway, cat_client):
    await cat_gateway.aclose()
    assert cat_client.closed is True


@pytest.mark.asyncio
async def test_aclose_without_client_is_noop():
    await ModelGateway(Settings()).aclose()
