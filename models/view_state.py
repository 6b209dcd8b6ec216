"""Presentable state held by each flow."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar

from models.codegen_models import CodeGenConfig
from models.vision_models import ClassificationResult

T = TypeVar("T")


class ViewStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass(frozen=True)
class ViewState(Generic[T]):
    """Snapshot of a flow.

    Exactly one of {loading, success with result, failed with error, idle/empty}
    holds; use the constructors below rather than building states by hand.

    Attributes:
        status: Current lifecycle position.
        result: Payload of a successful call (only when status is SUCCESS).
        error: User-facing message (only when status is FAILED).
        preview: Transient display handle (image preview data URL), kept
            across loading and terminal states.
    """

    status: ViewStatus = ViewStatus.IDLE
    result: Optional[T] = None
    error: Optional[str] = None
    preview: Optional[str] = None

    @property
    def is_loading(self) -> bool:
        return self.status is ViewStatus.LOADING

    @classmethod
    def idle(cls) -> "ViewState[T]":
        return cls()

    @classmethod
    def loading(cls, preview: Optional[str] = None) -> "ViewState[T]":
        return cls(status=ViewStatus.LOADING, preview=preview)

    @classmethod
    def success(cls, result: T, preview: Optional[str] = None) -> "ViewState[T]":
        return cls(status=ViewStatus.SUCCESS, result=result, preview=preview)

    @classmethod
    def empty(cls, preview: Optional[str] = None) -> "ViewState[T]":
        return cls(status=ViewStatus.EMPTY, preview=preview)

    @classmethod
    def failed(cls, error: str, preview: Optional[str] = None) -> "ViewState[T]":
        return cls(status=ViewStatus.FAILED, error=error, preview=preview)


def classification_state_to_dict(state: ViewState[ClassificationResult]) -> Dict[str, Any]:
    """Serialize the classification state in the shape the browser page renders."""
    return {
        "status": state.status.value,
        "isLoading": state.is_loading,
        "result": state.result.to_dict() if state.result is not None else None,
        "error": state.error,
        "imagePreview": state.preview,
    }


def codegen_state_to_dict(state: ViewState[str], config: CodeGenConfig) -> Dict[str, Any]:
    """Serialize the code generation state together with the editable config."""
    return {
        "status": state.status.value,
        "isLoading": state.is_loading,
        "script": displayed_script(state),
        "error": state.error,
        "config": config.to_dict(),
    }


def displayed_script(state: ViewState[str]) -> str:
    """Return the script text to show.

    A failed generation carries its placeholder script as the error message, so
    a failure always replaces whatever was displayed before.
    """
    if state.status is ViewStatus.SUCCESS and state.result is not None:
        return state.result
    if state.status is ViewStatus.FAILED:
        return state.error or ""
    return ""
