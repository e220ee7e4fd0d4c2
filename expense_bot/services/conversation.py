"""Expense conversation flow independent of the Telegram transport.

A user sends a multi-line expense, picks an existing category or types a new
one, and the expense is written to Notion. The methods below return
:class:`ConversationReply` objects that the handlers turn into messages,
edits and toasts.

Every failure keeps the pending draft so the user can retry or cancel.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from html import escape

from expense_bot.services.categories import CategoryCache, CategoryCreationError
from expense_bot.services.expenses import ExpenseService
from expense_bot.services.expenses_parser import (
    ExpenseDraft,
    ExpenseParseError,
    parse_expense_text,
)
from expense_bot.services.sessions import ConversationStage, SessionManager

logger = logging.getLogger(__name__)

NO_DRAFT_TEXT = "❌ Данные не найдены. Попробуйте начать заново."
NEW_CATEGORY_PROMPT = "✏️ Введите название новой категории:"
EMPTY_CATEGORY_TEXT = "❌ Название категории не может быть пустым. Попробуйте ещё раз."
CANCELLED_TEXT = "🗑️ Запись отменена. Вы можете начать заново."
CANCELLED_TOAST = "❌ Ввод отменён."
SAVE_FAILED_TOAST = "❌ Ошибка при сохранении в Notion."
SAVE_FAILED_TEXT = (
    "❌ Не удалось сохранить расход. "
    "Выберите категорию ещё раз или нажмите «Отмена»."
)
CATEGORY_FAILED_TOAST = "❌ Не удалось добавить категорию."
NEW_CATEGORY_FAILED_TEXT = (
    "❌ Не удалось сохранить расход. "
    "Отправьте название категории ещё раз или /cancel для отмены."
)


@dataclass(slots=True)
class ConversationReply:
    """What to show the user.

    ``categories`` is set when the category keyboard must be displayed.
    """

    text: str | None = None
    toast: str | None = None
    categories: list[str] | None = None


class ExpenseConversation:
    """State machine driving one expense from text to a Notion page."""

    def __init__(
        self,
        sessions: SessionManager,
        categories: CategoryCache,
        expenses: ExpenseService,
    ) -> None:
        self._sessions = sessions
        self._categories = categories
        self._expenses = expenses

    async def handle_text(self, user_id: int, text: str) -> ConversationReply | None:
        """Process a text message; ``None`` means the message is ignored."""

        state = self._sessions.get(user_id)
        stage = state.stage if state is not None else ConversationStage.IDLE
        if stage is ConversationStage.AWAITING_NEW_CATEGORY_NAME:
            return await self._create_category(user_id, text)
        if stage is ConversationStage.AWAITING_CATEGORY:
            logger.info("User %s already has a pending draft, message ignored", user_id)
            return None

        try:
            draft = parse_expense_text(text)
        except ExpenseParseError as error:
            logger.warning("User %s sent invalid expense: %r", user_id, error)
            return ConversationReply(text=str(error))

        if not self._sessions.start_draft(user_id, draft):
            return None

        categories = await self._categories.list_categories()
        return ConversationReply(
            text=self._expenses.render_draft(draft),
            categories=categories,
        )

    async def choose_category(self, user_id: int, category: str) -> ConversationReply:
        """Store the pending draft under an existing category."""

        state = self._sessions.get(user_id)
        if state is None or state.draft is None:
            logger.warning("User %s chose a category without a draft", user_id)
            return ConversationReply(toast=NO_DRAFT_TEXT)

        draft = state.draft
        logger.info("User %s chose category %r", user_id, category)
        try:
            await self._categories.ensure_category(category)
        except CategoryCreationError:
            logger.exception("Category %r could not be ensured for user %s", category, user_id)
            return await self._selection_failed(CATEGORY_FAILED_TOAST)

        result = await self._expenses.write(draft, category)
        if not result.success:
            logger.error("Failed to save expense for user %s: %s", user_id, result.error)
            return await self._selection_failed(SAVE_FAILED_TOAST)

        self._sessions.clear_if_current(user_id, state)
        return ConversationReply(
            text=self._expenses.render_saved(draft, category, result.date),
            toast=f'✅ Категория "{category}" выбрана!',
        )

    def request_new_category(self, user_id: int) -> ConversationReply:
        if not self._sessions.request_new_category(user_id):
            return ConversationReply(toast=NO_DRAFT_TEXT)
        return ConversationReply(text=NEW_CATEGORY_PROMPT, toast=NEW_CATEGORY_PROMPT)

    def cancel(self, user_id: int) -> ConversationReply:
        self._sessions.clear(user_id)
        logger.info("User %s cancelled the expense", user_id)
        return ConversationReply(text=CANCELLED_TEXT, toast=CANCELLED_TOAST)

    async def _create_category(self, user_id: int, text: str) -> ConversationReply:
        name = (text or "").strip()
        if not name:
            return ConversationReply(text=EMPTY_CATEGORY_TEXT)

        state = self._sessions.get(user_id)
        draft: ExpenseDraft | None = state.draft if state is not None else None
        if draft is None:
            self._sessions.clear(user_id)
            return ConversationReply(text=NO_DRAFT_TEXT)

        logger.info("User %s creates category %r", user_id, name)
        try:
            await self._categories.ensure_category(name)
        except CategoryCreationError as error:
            logger.exception("Category %r could not be created for user %s", name, user_id)
            return ConversationReply(
                text=f"❌ {escape(str(error))}. Попробуйте ещё раз или /cancel."
            )

        result = await self._expenses.write(draft, name)
        if not result.success:
            logger.error("Failed to save expense for user %s: %s", user_id, result.error)
            return ConversationReply(text=NEW_CATEGORY_FAILED_TEXT)

        self._sessions.clear_if_current(user_id, state)
        return ConversationReply(text=self._expenses.render_saved(draft, name, result.date))

    async def _selection_failed(self, toast: str) -> ConversationReply:
        categories = await self._categories.list_categories()
        return ConversationReply(text=SAVE_FAILED_TEXT, toast=toast, categories=categories)


__all__ = ["ConversationReply", "ExpenseConversation"]
