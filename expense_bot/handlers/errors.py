"""Last-resort error handler for all routers."""

from __future__ import annotations

import logging
from contextlib import suppress

from aiogram import Router
from aiogram.exceptions import TelegramAPIError
from aiogram.types import ErrorEvent, Message

logger = logging.getLogger(__name__)

router = Router()

ERROR_TOAST = "❌ Произошла ошибка."
ERROR_TEXT = "❌ Ошибка при сохранении. Попробуйте ещё раз или /cancel."


@router.errors()
async def unexpected_error(event: ErrorEvent) -> bool:
    """Log an unhandled exception and tell the user something went wrong.

    Conversation state is left untouched, and the keyboard of the pressed
    message stays so the user can pick a category again or cancel.
    """

    logger.error(
        "Unhandled error while processing update %s",
        event.update.update_id,
        exc_info=event.exception,
    )

    callback = event.update.callback_query
    message = event.update.message
    with suppress(TelegramAPIError):
        if callback is not None:
            await callback.answer(ERROR_TOAST)
            if isinstance(callback.message, Message):
                await callback.message.edit_text(
                    ERROR_TEXT,
                    reply_markup=callback.message.reply_markup,
                )
        elif message is not None:
            await message.answer(ERROR_TEXT)
    return True
