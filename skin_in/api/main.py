# skin_in/api/main.py
"""
FastAPI Application for Skin Condition Analysis
===============================================
Prediction, model comparison and contact endpoints.

Run with:
    uvicorn skin_in.api.main:app --port 8000
or:
    skin-in-api
"""

import os
os.environ.setdefault("CUDA_VISIBLE_DEVICES", "-1")
os.environ.setdefault("TF_CPP_MIN_LOG_LEVEL", "3")

from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from skin_in import __version__
from skin_in.api.dependencies import get_registry
from skin_in.api.router_contacts import router as contacts_router
from skin_in.api.router_predict import router as predict_router
from skin_in.api.schemas import HealthResponse, ModelInfo
from skin_in.classifier import ModelRegistry, SkinAnalyzer
from skin_in.config import Settings, load_settings
from skin_in.contacts import ContactStore
from skin_in.utils.logger import get_logger, set_console_level

logger = get_logger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    registry: Optional[ModelRegistry] = None,
    contact_store: Optional[ContactStore] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Runtime settings (default: load_settings())
        registry: Model registry (default: built from settings, Keras loader)
        contact_store: Contact store (default: empty in-memory store)

    Returns:
        FastAPI app. Every model load settles during start-up, before any
        request is served.
    """
    if settings is None:
        settings = load_settings()
    if registry is None:
        registry = ModelRegistry.from_settings(settings)
    if contact_store is None:
        contact_store = ContactStore()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan events."""
        logger.info("=" * 50)
        logger.info("Skin-In Analysis API Starting...")
        logger.info("=" * 50)

        status = await app.state.registry.load_all()
        failed = [m.value for m, ok in status.items() if not ok]
        if failed:
            logger.warning(f"Models unavailable: {failed}")

        yield

        logger.info("API Shutting down...")

    app = FastAPI(
        title="Skin-In Analysis API",
        description="""
        ## Skin condition analysis from photos

        Three models classify an uploaded photo into one of:
        Acne, Eczema, Psoriasis, Rosacea, Healthy Skin.

        - **CNN**: image pattern recognition
        - **RNN**: patch sequence ("temporal progression") analysis
        - **GNN**: patch graph ("lesion relationship") analysis

        Results are informational and not a medical diagnosis.
        """,
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    app.state.settings = settings
    app.state.registry = registry
    app.state.analyzer = SkinAnalyzer(registry)
    app.state.contacts = contact_store

    # CORS middleware for the Streamlit frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(predict_router)
    app.include_router(contacts_router)

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["Health"],
        summary="Health check endpoint"
    )
    async def health(registry: ModelRegistry = Depends(get_registry)):
        """Check API health and report which models are loaded."""
        return HealthResponse(
            status="healthy",
            version=__version__,
            models_loaded={m.value: ok for m, ok in registry.status().items()},
            all_models_loaded=registry.all_loaded()
        )

    @app.get("/models", response_model=List[ModelInfo], tags=["Health"])
    async def models(registry: ModelRegistry = Depends(get_registry)):
        """List declared models and their load state."""
        return [
            ModelInfo(
                model_id=d.id.value,
                description=d.description,
                artifact_path=d.artifact_path,
                loaded=d.loaded
            )
            for d in registry.descriptors()
        ]

    @app.get("/", tags=["Health"])
    async def root():
        """Root endpoint with API info."""
        return {
            "message": "Skin-In Analysis API",
            "version": __version__,
            "docs": "/docs",
            "endpoints": {
                "health": "/health",
                "models": "/models",
                "predict": "/predict",
                "compare": "/compare",
                "contacts": "/contacts",
                "export": "/contacts/export"
            }
        }

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    settings = app.state.settings
    set_console_level(settings.log_level)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
