"""Expense related business logic services."""

from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Callable
from dataclasses import dataclass
from html import escape
from zoneinfo import ZoneInfo

from expense_bot.notion import ExpenseRecord, ExpenseRepository, NotionError
from expense_bot.services.expenses_parser import ExpenseDraft

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class WriteResult:
    """Outcome of writing an expense to Notion."""

    success: bool
    date: str = ""
    error: str = ""


def format_date_to_iso(value: str) -> str:
    """Convert ``d.m.yyyy`` into ``yyyy-mm-dd`` by reordering and zero-padding."""

    day, month, year = value.split(".")
    return f"{year}-{month.zfill(2)}-{day.zfill(2)}"


def format_price(price: float) -> str:
    """Return a price without a trailing ``.0`` for whole amounts."""

    if price.is_integer():
        return str(int(price))
    return repr(price)


class ExpenseService:
    """Business logic for writing expenses."""

    def __init__(
        self,
        repository: ExpenseRepository,
        timezone: ZoneInfo,
        *,
        now: Callable[[ZoneInfo], dt.datetime] | None = None,
    ) -> None:
        self._repository = repository
        self._timezone = timezone
        self._now = now or dt.datetime.now

    def today_iso(self) -> str:
        """Return today's date in the configured time zone."""

        return self._now(self._timezone).date().isoformat()

    def resolve_date(self, draft: ExpenseDraft) -> str:
        """Return the ISO date for a draft, defaulting to today."""

        if draft.date:
            return format_date_to_iso(draft.date)
        return self.today_iso()

    async def write(self, draft: ExpenseDraft, category: str) -> WriteResult:
        """Create one Notion page for the draft.

        Notion failures are reported in the result instead of being raised.
        """

        record = ExpenseRecord(
            name=draft.name,
            price=draft.price,
            category=category,
            date=self.resolve_date(draft),
            comment=draft.comment,
        )
        logger.info(
            "Creating expense %r (%s) in category %r for %s",
            record.name,
            format_price(record.price),
            record.category,
            record.date,
        )
        try:
            page_id = await self._repository.create(record)
        except NotionError as error:
            logger.error("Failed to write expense %r to Notion: %s", record, error)
            return WriteResult(success=False, error=str(error))

        logger.info("Expense %r saved as page %s", record.name, page_id)
        return WriteResult(success=True, date=record.date)

    @staticmethod
    def render_draft(draft: ExpenseDraft) -> str:
        """Return the summary shown before the category is chosen."""

        return (
            "✅ Данные получены!\n\n"
            f"📄 Название: {escape(draft.name)}\n"
            f"💰 Цена: {format_price(draft.price)} ₽\n"
            f"📅 Дата: {escape(draft.date) or 'сегодня'}\n"
            f"📝 Комментарий: {escape(draft.comment) or '—'}\n\n"
            "👉 Выберите категорию:"
        )

    @staticmethod
    def render_saved(draft: ExpenseDraft, category: str, date: str) -> str:
        """Return the confirmation for a stored expense."""

        lines = [
            "✅ Записано:",
            f"📄 <b>{escape(draft.name)}</b>",
            f"💰 <b>{format_price(draft.price)} ₽</b>",
            f"📁 <b>{escape(category)}</b>",
            f"📅 {date}",
        ]
        if draft.comment:
            lines.append(f"💬 {escape(draft.comment)}")
        return "\n".join(lines)


__all__ = ["ExpenseService", "WriteResult", "format_date_to_iso", "format_price"]
