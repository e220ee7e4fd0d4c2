"""Application entry point for the Notion expense Telegram bot."""

from __future__ import annotations

import asyncio
import logging

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode

from expense_bot.config import ConfigurationError, get_settings
from expense_bot.handlers import setup_routers
from expense_bot.logging_config import setup_logging
from expense_bot.notion import CategoryRepository, ExpenseRepository, create_notion_client
from expense_bot.services import (
    CategoryCache,
    ExpenseConversation,
    ExpenseService,
    SessionManager,
)

logger = logging.getLogger(__name__)


async def on_startup() -> tuple[Dispatcher, Bot]:
    """Configure application components and return dispatcher and bot."""

    settings = get_settings()
    setup_logging(settings.logging)

    notion_client = create_notion_client(settings)
    category_repository = CategoryRepository(notion_client, settings.notion.database_id)
    expense_repository = ExpenseRepository(notion_client, settings.notion.database_id)

    category_cache = CategoryCache(
        category_repository.fetch_names,
        category_repository.append_option,
        ttl=settings.notion.category_cache_ttl,
    )
    expense_service = ExpenseService(expense_repository, settings.timezone)
    conversation = ExpenseConversation(SessionManager(), category_cache, expense_service)

    bot = Bot(
        token=settings.bot.token,
        default=DefaultBotProperties(parse_mode=ParseMode.HTML),
    )
    dispatcher = Dispatcher()
    dispatcher.include_router(setup_routers())

    dispatcher["settings"] = settings
    dispatcher["category_cache"] = category_cache
    dispatcher["expense_service"] = expense_service
    dispatcher["conversation"] = conversation
    dispatcher["notion_client"] = notion_client

    return dispatcher, bot


async def main() -> None:
    """Run polling using the configured dispatcher and bot."""

    dispatcher, bot = await on_startup()
    notion_client = dispatcher["notion_client"]

    try:
        logger.info("Starting expense bot polling")
        await dispatcher.start_polling(bot)
    finally:
        logger.info("Expense bot stopped")
        await bot.session.close()
        await notion_client.close()


def run() -> None:
    """Console script entry point."""

    try:
        asyncio.run(main())
    except ConfigurationError as error:
        logging.basicConfig(level=logging.ERROR)
        logging.error("Configuration error: %s", error)
        raise SystemExit(1) from error


if __name__ == "__main__":
    run()
