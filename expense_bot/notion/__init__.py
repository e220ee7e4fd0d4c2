"""Notion package with the API client, records and repository helpers."""

from .client import (
    NotionAPIError,
    NotionClient,
    NotionError,
    NotionSchemaError,
    create_notion_client,
)
from .models import ExpenseRecord
from .repositories import CategoryRepository, ExpenseRepository

__all__ = [
    "NotionClient",
    "NotionError",
    "NotionAPIError",
    "NotionSchemaError",
    "ExpenseRecord",
    "CategoryRepository",
    "ExpenseRepository",
    "create_notion_client",
]
