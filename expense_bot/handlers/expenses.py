"""Handlers for entering an expense and choosing its category."""

from __future__ import annotations

import logging
from contextlib import suppress

from aiogram import F, Router
from aiogram.exceptions import TelegramBadRequest
from aiogram.filters import Command
from aiogram.types import CallbackQuery, Message

from expense_bot.handlers.common import (
    CANCEL_ACTION,
    CHOOSE_ACTION,
    NEW_CATEGORY_ACTION,
    ExpenseAction,
    build_categories_keyboard,
)
from expense_bot.services import ConversationReply, ExpenseConversation

logger = logging.getLogger(__name__)

router = Router()


async def _edit_with_reply(callback: CallbackQuery, reply: ConversationReply) -> None:
    """Answer the button press and replace the keyboard message with the reply."""

    await callback.answer(reply.toast)
    if not isinstance(callback.message, Message) or reply.text is None:
        return
    markup = (
        build_categories_keyboard(reply.categories)
        if reply.categories is not None
        else None
    )
    with suppress(TelegramBadRequest):
        await callback.message.edit_text(reply.text, reply_markup=markup)


@router.message(Command("cancel"))
async def cmd_cancel(message: Message, conversation: ExpenseConversation) -> None:
    """Cancel the pending expense."""

    if message.from_user is None:
        return

    reply = conversation.cancel(message.from_user.id)
    await message.answer(reply.text)


@router.message(F.text)
async def expense_text_received(
    message: Message,
    conversation: ExpenseConversation,
) -> None:
    """Handle an expense entry or the name of a new category."""

    if message.from_user is None:
        return

    text = message.text or ""
    if text.startswith("/"):
        return

    logger.info(
        "Text from user %s (@%s): %r",
        message.from_user.id,
        message.from_user.username,
        text[:100],
    )
    reply = await conversation.handle_text(message.from_user.id, text)
    if reply is None or reply.text is None:
        return

    markup = (
        build_categories_keyboard(reply.categories)
        if reply.categories is not None
        else None
    )
    await message.answer(reply.text, reply_markup=markup)


@router.callback_query(ExpenseAction.filter(F.action == CHOOSE_ACTION))
async def category_chosen(
    callback: CallbackQuery,
    callback_data: ExpenseAction,
    conversation: ExpenseConversation,
) -> None:
    """Save the pending expense under the selected category."""

    if not callback_data.category:
        await callback.answer()
        return

    reply = await conversation.choose_category(callback.from_user.id, callback_data.category)
    await _edit_with_reply(callback, reply)


@router.callback_query(ExpenseAction.filter(F.action == NEW_CATEGORY_ACTION))
async def new_category_requested(
    callback: CallbackQuery,
    conversation: ExpenseConversation,
) -> None:
    """Ask the user to type a name for a new category."""

    reply = conversation.request_new_category(callback.from_user.id)
    await callback.answer(reply.toast)
    if isinstance(callback.message, Message) and reply.text is not None:
        await callback.message.answer(reply.text)


@router.callback_query(ExpenseAction.filter(F.action == CANCEL_ACTION))
async def cancel_pressed(
    callback: CallbackQuery,
    conversation: ExpenseConversation,
) -> None:
    """Cancel the pending expense from the inline keyboard."""

    reply = conversation.cancel(callback.from_user.id)
    await _edit_with_reply(callback, reply)
