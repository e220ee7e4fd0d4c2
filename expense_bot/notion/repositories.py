"""Repositories provide high level access to the Notion expenses database."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from expense_bot.notion.client import NotionClient, NotionSchemaError
from expense_bot.notion.models import CATEGORY_PROPERTY, NEW_OPTION_COLOR, ExpenseRecord

logger = logging.getLogger(__name__)


class CategoryRepository:
    """Repository for the category options of the expenses database."""

    def __init__(
        self,
        client: NotionClient,
        database_id: str,
        *,
        property_name: str = CATEGORY_PROPERTY,
    ) -> None:
        self._client = client
        self._database_id = database_id
        self._property_name = property_name

    async def fetch_names(self) -> list[str]:
        """Return option names of the category property in database order."""

        database = await self._client.retrieve_database(self._database_id)
        prop = database.get("properties", {}).get(self._property_name)
        if not prop or prop.get("type") != "multi_select":
            raise NotionSchemaError(
                f'Property "{self._property_name}" must be of type multi_select'
            )
        options = prop.get("multi_select", {}).get("options", [])
        return [option["name"] for option in options]

    async def append_option(self, name: str, existing: Sequence[str]) -> None:
        """Extend the option set with ``name``.

        Notion replaces the option list on update, so ``existing`` must hold
        every option that should be kept.
        """

        options = [{"name": option} for option in existing]
        options.append({"name": name, "color": NEW_OPTION_COLOR})
        await self._client.update_database(
            self._database_id,
            {self._property_name: {"multi_select": {"options": options}}},
        )
        logger.info("Category option %r added to Notion", name)


class ExpenseRepository:
    """Repository for creating expense pages."""

    def __init__(self, client: NotionClient, database_id: str) -> None:
        self._client = client
        self._database_id = database_id

    async def create(self, record: ExpenseRecord) -> str | None:
        """Create a page for ``record`` and return its Notion id."""

        page = await self._client.create_page(self._database_id, record.to_properties())
        return page.get("id")


__all__ = ["CategoryRepository", "ExpenseRepository"]
