"""Telegram bot handlers."""

from aiogram import Router

from . import errors, expenses, start


def setup_routers() -> Router:
    """Return a root router with all sub-routers included."""

    router = Router()
    router.include_router(errors.router)
    router.include_router(start.router)
    router.include_router(expenses.router)
    return router


__all__ = ["setup_routers"]
