"""FastAPI routes for the zero-shot image classification flow."""

from fastapi import APIRouter, File, HTTPException, Request, UploadFile

from controllers.classification_controller import ClassificationFlow
from models.view_state import classification_state_to_dict

router = APIRouter(prefix="/api/classification", tags=["classification"])


def _get_flow(request: Request) -> ClassificationFlow:
	"""Retrieve the classification flow from the app state."""
	flow = getattr(request.app.state, "classification_flow", None)
	if flow is None:
		raise HTTPException(status_code=500, detail="Classification flow not initialized.")
	return flow


@router.post("", summary="Classify an uploaded image")
async def classify_image(request: Request, file: UploadFile = File(...)):
	"""Run the classification flow for the uploaded file and return its state.

	Invalid uploads and model failures are reported in the returned state,
	not as HTTP errors.
	"""
	flow = _get_flow(request)
	try:
		state = await flow.select_file(file)
	except HTTPException:
		raise
	except Exception as exc:  # pylint: disable=broad-exception-caught
		raise HTTPException(status_code=500, detail="Failed to process image.") from exc
	return classification_state_to_dict(state)


@router.get("", summary="Current classification state")
async def get_classification_state(request: Request):
	return classification_state_to_dict(_get_flow(request).state)


@router.delete("", summary="Reset the classification flow")
async def reset_classification(request: Request):
	return classification_state_to_dict(_get_flow(request).reset())
