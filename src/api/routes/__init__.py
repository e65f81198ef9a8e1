from fastapi import FastAPI

from . import catalog_badges, health


def register_routes(app: FastAPI) -> None:
    """Attach all API routers to the FastAPI application."""
    app.include_router(health.router)
    app.include_router(catalog_badges.router)
