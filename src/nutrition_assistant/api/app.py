"""FastAPI application factory."""

from fastapi import FastAPI

from nutrition_assistant.api.meals import router as meals_router
from nutrition_assistant.api.recipes import router as recipes_router
from nutrition_assistant.api.tools import router as tools_router
from nutrition_assistant.api.tracking import router as tracking_router
from nutrition_assistant.app_logging import configure_logging
from nutrition_assistant.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()

    app = FastAPI()
    app.state.container = container

    app.include_router(tools_router)
    app.include_router(meals_router)
    app.include_router(tracking_router)
    app.include_router(recipes_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
