import logging
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from controllers.classification_controller import ClassificationFlow
from controllers.codegen_controller import CodeGenerationFlow
from routes.classification_route import router as classification_router
from routes.codegen_route import router as codegen_router
from services.openai.model_gateway import ModelGateway
from utils.settings import Settings, load_settings

BASE_DIR = Path(__file__).resolve().parent
PUBLIC_DIR = BASE_DIR / "public"

load_dotenv()  # Load environment variables from .env file if present

LOGGER = logging.getLogger(__name__)


def build_lifespan(settings: Settings | None = None, gateway: ModelGateway | None = None):
    """Return a lifespan manager that wires the gateway and both flows onto `app.state`."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Lifespan manager to initialize:
          - the model gateway (the OpenAI async client is created on first use)
          - one view-state flow per feature
        and attach them to `app.state`.
        """
        resolved_settings = settings or load_settings()
        if not resolved_settings.has_credential:
            # Not fatal: each call reports the missing credential on its own.
            LOGGER.warning("OPENAI_API_KEY is not set; model calls will fail until it is configured.")

        model_gateway = gateway or ModelGateway(resolved_settings)
        app.state.settings = resolved_settings
        app.state.gateway = model_gateway
        app.state.classification_flow = ClassificationFlow(model_gateway)
        app.state.codegen_flow = CodeGenerationFlow(model_gateway)

        try:
            yield
        finally:
            try:
                await model_gateway.aclose()
            except Exception as exc:  # pylint: disable=broad-exception-caught
                LOGGER.warning("Error while closing the model client: %s", type(exc).__name__)

    return lifespan


def create_app(settings: Settings | None = None, gateway: ModelGateway | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application instance.
    """
    app = FastAPI(title="Vision Trainer Studio", version="1.0.0", lifespan=build_lifespan(settings, gateway))

    # Serve static assets from the public directory, if it exists.
    if PUBLIC_DIR.exists():
        app.mount("/public", StaticFiles(directory=PUBLIC_DIR), name="public")

    @app.get("/", include_in_schema=False)
    async def serve_index():
        """
        Serve the frontend index page from the public directory.
        """
        index_path = PUBLIC_DIR / "index.html"
        if not index_path.exists():
            raise HTTPException(status_code=404, detail="Frontend not found")
        return FileResponse(index_path)

    @app.get("/health")
    async def health(request: Request):
        """
        Simple health check reporting whether a model credential is configured.
        """
        app_settings = getattr(request.app.state, "settings", None)
        return {
            "ok": True,
            "credential_configured": bool(app_settings and app_settings.has_credential),
        }

    # Register application routers
    app.include_router(classification_router)
    app.include_router(codegen_router)

    return app


logging.basicConfig(
    level=getattr(logging, load_settings().log_level, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app()
