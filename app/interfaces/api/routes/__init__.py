from fastapi import FastAPI

from .notification_preferences import router as notification_preferences_router
from .notification_templates import router as notification_templates_router
from .notifications import router as notifications_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application.

    Preference and template routes come first so their fixed paths are not
    captured by ``/notifications/{notification_id}``.
    """

    app.include_router(notification_preferences_router)
    app.include_router(notification_templates_router)
    app.include_router(notifications_router)
