"""FastAPI routes for the training-script generator."""

from typing import Any, Dict

from fastapi import APIRouter, Body, HTTPException, Request

from controllers.codegen_controller import CodeGenerationFlow
from models.codegen_models import BASE_MODEL_OPTIONS, CodeGenConfig, MLFramework
from models.view_state import codegen_state_to_dict

router = APIRouter(prefix="/api/codegen", tags=["codegen"])


def _get_flow(request: Request) -> CodeGenerationFlow:
	"""Retrieve the code generation flow from the app state."""
	flow = getattr(request.app.state, "codegen_flow", None)
	if flow is None:
		raise HTTPException(status_code=500, detail="Code generation flow not initialized.")
	return flow


def _state_payload(flow: CodeGenerationFlow) -> Dict[str, Any]:
	return codegen_state_to_dict(flow.state, flow.config)


@router.get("/options", summary="Form options for the generator")
async def get_options():
	"""Return the selectable frameworks, base models, and default configuration."""
	return {
		"frameworks": [framework.value for framework in MLFramework],
		"baseModels": list(BASE_MODEL_OPTIONS),
		"defaults": CodeGenConfig().to_dict(),
	}


@router.get("", summary="Current generation state")
async def get_codegen_state(request: Request):
	return _state_payload(_get_flow(request))


@router.get("/config")
async def get_config(request: Request):
	return _get_flow(request).config.to_dict()


@router.patch("/config", summary="Edit configuration fields")
async def patch_config(request: Request, changes: Dict[str, Any] = Body(...)):
	"""Apply a partial update; field names may be camelCase or snake_case."""
	flow = _get_flow(request)
	try:
		config = flow.update_config(changes)
	except ValueError as exc:
		raise HTTPException(status_code=400, detail=str(exc)) from exc
	return config.to_dict()


@router.delete("/config", summary="Restore the default configuration")
async def reset_config(request: Request):
	return _get_flow(request).reset_config().to_dict()


@router.post("/generate", summary="Generate a training script")
async def generate_script(request: Request):
	"""Generate a script from the current configuration and return the flow state."""
	flow = _get_flow(request)
	try:
		await flow.generate()
	except HTTPException:
		raise
	except Exception as exc:  # pylint: disable=broad-exception-caught
		raise HTTPException(status_code=500, detail="Failed to generate code.") from exc
	return _state_payload(flow)
