"""Common inline keyboards and callback data for handlers."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from aiogram.filters.callback_data import CallbackData
from aiogram.types import InlineKeyboardMarkup
from aiogram.utils.keyboard import InlineKeyboardBuilder

logger = logging.getLogger(__name__)

CHOOSE_ACTION = "choose"
NEW_CATEGORY_ACTION = "new"
CANCEL_ACTION = "cancel"


class ExpenseAction(CallbackData, prefix="exp"):
    """Callback data schema for the category selection keyboard."""

    action: str
    category: str | None = None


def build_categories_keyboard(categories: Sequence[str]) -> InlineKeyboardMarkup:
    """Return inline keyboard with one row per category plus create and cancel."""

    builder = InlineKeyboardBuilder()
    for category in categories:
        try:
            data = ExpenseAction(action=CHOOSE_ACTION, category=category).pack()
        except ValueError as error:
            logger.warning("Category %r skipped in keyboard: %s", category, error)
            continue
        builder.button(text=category, callback_data=data)
    builder.button(
        text="➕ Создать новую",
        callback_data=ExpenseAction(action=NEW_CATEGORY_ACTION).pack(),
    )
    builder.button(
        text="❌ Отмена",
        callback_data=ExpenseAction(action=CANCEL_ACTION).pack(),
    )
    builder.adjust(1)
    return builder.as_markup()


__all__ = [
    "ExpenseAction",
    "CHOOSE_ACTION",
    "NEW_CATEGORY_ACTION",
    "CANCEL_ACTION",
    "build_categories_keyboard",
]
