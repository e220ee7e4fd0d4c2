"""Handlers for the /start and /refresh commands."""

from __future__ import annotations

import logging

from aiogram import Router
from aiogram.filters import Command, CommandStart
from aiogram.types import Message

from expense_bot.services import CategoryCache

logger = logging.getLogger(__name__)

router = Router()

START_TEXT = (
    "👋 Привет! Я бот для записи расходов в Notion.\n\n"
    "📌 Отправьте данные в формате:\n\n"
    "- Название траты\n"
    "- Цена\n"
    "- Дата в формате dd.mm.yyyy (опционально)\n"
    "- Комментарий (опционально)\n\n"
    "Пример:\n"
    "Кофта красная\n"
    "150,3\n"
    "21.09.2025\n"
    "Купил на распродаже\n\n"
    "➡️ После этого я предложу выбрать категорию.\n\n"
    "/cancel - Отменить текущую запись\n"
    "/refresh - Обновить список категорий"
)


@router.message(CommandStart())
async def cmd_start(message: Message) -> None:
    """Send greeting and usage instructions to the user."""

    if message.from_user is not None:
        logger.info(
            "User %s (@%s) started the bot",
            message.from_user.id,
            message.from_user.username,
        )
    await message.answer(START_TEXT)


@router.message(Command("refresh"))
async def cmd_refresh(message: Message, category_cache: CategoryCache) -> None:
    """Drop cached categories so the next keyboard reloads them from Notion."""

    category_cache.invalidate()
    await message.answer("🔄 Список категорий будет загружен заново.")
