"""Time-boxed cache over the remote category list."""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable, Sequence

from expense_bot.notion import NotionError

logger = logging.getLogger(__name__)

DEFAULT_TTL = 5 * 60.0

FetchCategories = Callable[[], Awaitable[Sequence[str]]]
AppendCategory = Callable[[str, Sequence[str]], Awaitable[None]]


class CategoryCreationError(RuntimeError):
    """Raised when a category cannot be created remotely."""

    def __init__(self, name: str) -> None:
        super().__init__(f'Не удалось создать категорию "{name}"')
        self.name = name


class CategoryCache:
    """Process-wide copy of the category names.

    ``fetch`` returns every remote category; ``append`` adds one name to the
    remote option set given the names that must be kept. ``clock`` returns
    seconds and is only compared against itself.
    """

    def __init__(
        self,
        fetch: FetchCategories,
        append: AppendCategory,
        *,
        ttl: float = DEFAULT_TTL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._fetch = fetch
        self._append = append
        self._ttl = ttl
        self._clock = clock
        self._names: list[str] = []
        self._fetched_at: float | None = None

    @property
    def is_fresh(self) -> bool:
        return (
            self._fetched_at is not None
            and self._clock() - self._fetched_at < self._ttl
        )

    async def list_categories(self) -> list[str]:
        """Return category names, refreshing them once the TTL has passed.

        A failed refresh is logged and yields an empty list.
        """

        if self.is_fresh:
            logger.debug("Using cached categories")
            return list(self._names)

        try:
            return await self._refresh()
        except Exception:
            logger.exception("Failed to fetch categories")
            return []

    async def ensure_category(self, name: str) -> str:
        """Make sure ``name`` exists remotely, creating it when missing."""

        if name in self._names:
            logger.debug("Category %r already cached", name)
            return name

        try:
            existing = list(self._names) if self.is_fresh else await self._refresh()
        except NotionError as exc:
            logger.error("Cannot load categories before creating %r: %s", name, exc)
            raise CategoryCreationError(name) from exc
        if name in existing:
            return name

        logger.info("Adding new category %r", name)
        try:
            await self._append(name, existing)
        except NotionError as exc:
            logger.error("Failed to add category %r: %s", name, exc)
            raise CategoryCreationError(name) from exc

        self._names = [*existing, name]
        self._fetched_at = self._clock()
        logger.info("Category %r added", name)
        return name

    def invalidate(self) -> None:
        """Forget cached names so the next read goes to the remote store."""

        self._names = []
        self._fetched_at = None
        logger.info("Category cache cleared")

    async def _refresh(self) -> list[str]:
        logger.info("Fetching categories")
        names = list(dict.fromkeys(await self._fetch()))
        self._names = names
        self._fetched_at = self._clock()
        logger.info("Fetched %d categories", len(names))
        return list(names)


__all__ = ["CategoryCache", "CategoryCreationError", "DEFAULT_TTL"]
