"""Per-user conversation state."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from expense_bot.services.expenses_parser import ExpenseDraft


class ConversationStage(enum.Enum):
    IDLE = "idle"
    AWAITING_CATEGORY = "awaiting_category"
    AWAITING_NEW_CATEGORY_NAME = "awaiting_new_category_name"


@dataclass(slots=True)
class ConversationState:
    """Pending draft of one user and whether a category name is expected."""

    draft: ExpenseDraft | None = None
    awaiting_new_category: bool = False

    @property
    def stage(self) -> ConversationStage:
        if self.draft is None:
            return ConversationStage.IDLE
        if self.awaiting_new_category:
            return ConversationStage.AWAITING_NEW_CATEGORY_NAME
        return ConversationStage.AWAITING_CATEGORY


class SessionManager:
    """In-memory mapping from Telegram user id to :class:`ConversationState`."""

    def __init__(self) -> None:
        self._states: dict[int, ConversationState] = {}

    def get(self, user_id: int) -> ConversationState | None:
        return self._states.get(user_id)

    def create(self, user_id: int) -> ConversationState:
        state = ConversationState()
        self._states[user_id] = state
        return state

    def get_or_create(self, user_id: int) -> ConversationState:
        state = self._states.get(user_id)
        if state is None:
            state = self.create(user_id)
        return state

    def clear(self, user_id: int) -> None:
        """Drop the draft and the new-category flag."""

        self._states.pop(user_id, None)

    def clear_if_current(self, user_id: int, state: ConversationState) -> bool:
        """Clear only while ``state`` is still the user's live state.

        A cancel followed by a new draft replaces the state object, and that
        newer draft must survive the completion of the older one.
        """

        if self._states.get(user_id) is not state:
            return False
        del self._states[user_id]
        return True

    def start_draft(self, user_id: int, draft: ExpenseDraft) -> bool:
        """Store ``draft`` unless one is already pending.

        Returns ``False`` and leaves the pending draft untouched otherwise.
        """

        state = self.get_or_create(user_id)
        if state.draft is not None:
            return False
        state.draft = draft
        state.awaiting_new_category = False
        return True

    def request_new_category(self, user_id: int) -> bool:
        """Switch to waiting for a category name; requires a pending draft."""

        state = self.get(user_id)
        if state is None or state.draft is None:
            return False
        state.awaiting_new_category = True
        return True


__all__ = ["ConversationStage", "ConversationState", "SessionManager"]
