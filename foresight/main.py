"""Main FastAPI application."""
from typing import Optional

from fastapi import FastAPI

from foresight import __version__
from foresight.config import settings
from foresight import routes as scenario_routes
from foresight.store import ResultSlot


def create_app(slot: Optional[ResultSlot] = None) -> FastAPI:
    """Build the API around a result slot shared with the pipeline."""
    app = FastAPI(
        title="Foresight API",
        description="Latest AI future-scenario run, as JSON",
        version=__version__,
    )
    app.state.result_slot = slot or ResultSlot()

    app.include_router(scenario_routes.router, prefix=settings.API_V1_PREFIX, tags=["Scenarios"])

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "message": "Foresight API",
            "version": __version__,
            "scenarios": f"{settings.API_V1_PREFIX}/scenarios",
            "docs": "/docs",
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "foresight.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=True,
    )
