"""Domain models for the training-script generator."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Mapping

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class MLFramework(str, Enum):
    PYTORCH = "PyTorch"
    TENSORFLOW = "TensorFlow/Keras"
    SCIKIT_LEARN = "Scikit-Learn (Classic ML)"


BASE_MODEL_OPTIONS = ("ResNet50", "VGG16", "MobileNetV2", "EfficientNetB0")


class CodeGenConfig(BaseModel):
    """Form values describing the training script to generate.

    `base_model` is only meaningful when `use_transfer_learning` is true.
    Assignments are validated so a bad form value never lands in the config.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )

    framework: MLFramework = MLFramework.PYTORCH
    dataset_name: str = "custom_dataset"
    num_classes: int = Field(default=2, ge=1)
    image_size: int = Field(default=224, gt=0)
    batch_size: int = Field(default=32, gt=0)
    epochs: int = Field(default=10, gt=0)
    use_transfer_learning: bool = True
    base_model: str = "ResNet50"

    def with_changes(self, changes: Mapping[str, Any]) -> "CodeGenConfig":
        """Return a validated copy with the given fields (snake_case or camelCase) replaced."""
        data = self.model_dump()
        for key, value in changes.items():
            data[_field_name(key)] = value
        return CodeGenConfig.model_validate(data)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


def _field_name(key: str) -> str:
    if key in CodeGenConfig.model_fields:
        return key
    for name in CodeGenConfig.model_fields:
        if to_camel(name) == key:
            return name
    raise ValueError(f"Unknown configuration field '{key}'")
