"""Business logic services for the expense bot."""

from .categories import CategoryCache, CategoryCreationError
from .conversation import ConversationReply, ExpenseConversation
from .expenses import ExpenseService, WriteResult, format_date_to_iso
from .expenses_parser import (
    ExpenseDraft,
    ExpenseParseError,
    InsufficientFieldsError,
    InvalidPriceError,
    parse_expense_text,
)
from .sessions import ConversationStage, ConversationState, SessionManager

__all__ = [
    "CategoryCache",
    "CategoryCreationError",
    "ConversationReply",
    "ExpenseConversation",
    "ExpenseService",
    "WriteResult",
    "format_date_to_iso",
    "ExpenseDraft",
    "ExpenseParseError",
    "InsufficientFieldsError",
    "InvalidPriceError",
    "parse_expense_text",
    "ConversationStage",
    "ConversationState",
    "SessionManager",
]
