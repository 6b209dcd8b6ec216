"""Domain models for the image classification flow."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Union

from pydantic import BaseModel, ConfigDict, Field

from utils.errors import ResponseFormatError


@dataclass(frozen=True)
class ImagePayload:
    """Transport-ready representation of an uploaded image.

    Attributes:
        encoded_data: Standard base64 text of the file contents, without any
            `data:<type>;base64,` prefix.
        media_type: Declared media type of the upload (e.g. `image/png`).
    """

    encoded_data: str
    media_type: str

    def as_data_url(self) -> str:
        return f"data:{self.media_type};base64,{self.encoded_data}"


class ClassificationResult(BaseModel):
    """Zero-shot classification returned by the vision model."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    label: str
    confidence: float = Field(ge=0, le=100)
    description: str
    suggested_tags: List[str] = Field(alias="suggestedTags")

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)


@dataclass(frozen=True)
class ClassificationOk:
    result: ClassificationResult


@dataclass(frozen=True)
class ClassificationEmpty:
    """The service answered without any structured content."""


@dataclass(frozen=True)
class ClassificationParseError:
    error: ResponseFormatError = field(compare=False)


ClassificationOutcome = Union[ClassificationOk, ClassificationEmpty, ClassificationParseError]
