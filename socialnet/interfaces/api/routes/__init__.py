"""API route registration."""

from fastapi import FastAPI

from . import account, auth, notifications, posts, realtime, users


def register_routes(app: FastAPI) -> None:
    """Attach every router to ``app``."""

    app.include_router(auth.router)
    app.include_router(account.router)
    app.include_router(users.router)
    app.include_router(posts.router)
    app.include_router(notifications.router)
    app.include_router(realtime.router)


__all__ = ["register_routes"]
