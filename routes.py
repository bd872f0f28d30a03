# routes.py
from fastapi import FastAPI
from controller.cdn_controller import cdn_router


def register_routes(app: FastAPI) -> None:
    """Register & Access control controllers here."""
    app.include_router(cdn_router)
