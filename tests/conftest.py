"""Shared fixtures and fakes for the expense bot tests."""

from __future__ import annotations

import datetime as dt
from collections.abc import Sequence
from zoneinfo import ZoneInfo

import pytest

from expense_bot.notion import ExpenseRecord, NotionAPIError
from expense_bot.services import (
    CategoryCache,
    ExpenseConversation,
    ExpenseService,
    SessionManager,
)

MOSCOW = ZoneInfo("Europe/Moscow")
# 23:30 UTC on 20 Sep is already 21 Sep in Moscow.
FIXED_NOW = dt.datetime(2025, 9, 20, 23, 30, tzinfo=dt.timezone.utc)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeCategoryStore:
    """Stands in for the Notion category property."""

    def __init__(self, names: Sequence[str] = ()) -> None:
        self.names = list(names)
        self.fetch_calls = 0
        self.append_calls: list[tuple[str, list[str]]] = []
        self.fail_fetch = False
        self.fail_append = False
        self.fetch_exception: Exception | None = None

    async def fetch(self) -> list[str]:
        self.fetch_calls += 1
        if self.fetch_exception is not None:
            raise self.fetch_exception
        if self.fail_fetch:
            raise NotionAPIError("fetch failed", status_code=502)
        return list(self.names)

    async def append(self, name: str, existing: Sequence[str]) -> None:
        self.append_calls.append((name, list(existing)))
        if self.fail_append:
            raise NotionAPIError("update failed", status_code=400)
        self.names = [*existing, name]


class FakeExpenseRepository:
    def __init__(self) -> None:
        self.records: list[ExpenseRecord] = []
        self.fail = False

    async def create(self, record: ExpenseRecord) -> str:
        if self.fail:
            raise NotionAPIError("validation failed", status_code=400)
        self.records.append(record)
        return f"page-{len(self.records)}"


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> FakeCategoryStore:
    return FakeCategoryStore(["Кофе", "Продукты"])


@pytest.fixture
def cache(store: FakeCategoryStore, clock: FakeClock) -> CategoryCache:
    return CategoryCache(store.fetch, store.append, ttl=300, clock=clock)


@pytest.fixture
def expense_repository() -> FakeExpenseRepository:
    return FakeExpenseRepository()


@pytest.fixture
def expense_service(expense_repository: FakeExpenseRepository) -> ExpenseService:
    return ExpenseService(
        expense_repository,
        MOSCOW,
        now=lambda tz: FIXED_NOW.astimezone(tz),
    )


@pytest.fixture
def sessions() -> SessionManager:
    return SessionManager()


@pytest.fixture
def conversation(
    sessions: SessionManager,
    cache: CategoryCache,
    expense_service: ExpenseService,
) -> ExpenseConversation:
    return ExpenseConversation(sessions, cache, expense_service)
