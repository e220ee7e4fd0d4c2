"""Thin asynchronous client for the Notion REST API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from expense_bot.config import Settings

logger = logging.getLogger(__name__)

NOTION_API_URL = "https://api.notion.com/v1"


class NotionError(RuntimeError):
    """Base class for failures talking to Notion."""


class NotionAPIError(NotionError):
    """Raised when a Notion request fails at the HTTP or transport level."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NotionSchemaError(NotionError):
    """Raised when the database does not have the expected properties."""


class NotionClient:
    """Minimal wrapper over the database and page endpoints used by the bot."""

    def __init__(
        self,
        token: str,
        *,
        version: str,
        timeout: httpx.Timeout | float = 30.0,
        base_url: str = NOTION_API_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers={
                "Authorization": f"Bearer {token}",
                "Notion-Version": version,
                "Content-Type": "application/json",
            },
        )

    async def retrieve_database(self, database_id: str) -> dict[str, Any]:
        return await self._request("GET", f"/databases/{database_id}")

    async def update_database(
        self, database_id: str, properties: dict[str, Any]
    ) -> dict[str, Any]:
        return await self._request(
            "PATCH", f"/databases/{database_id}", json={"properties": properties}
        )

    async def create_page(
        self, database_id: str, properties: dict[str, Any]
    ) -> dict[str, Any]:
        payload = {"parent": {"database_id": database_id}, "properties": properties}
        return await self._request("POST", "/pages", json=payload)

    async def close(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, url: str, **kwargs: Any) -> dict[str, Any]:
        try:
            response = await self._client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            detail = _error_message(exc.response)
            logger.warning(
                "Notion %s %s failed with %s: %s",
                method,
                url,
                exc.response.status_code,
                detail,
            )
            raise NotionAPIError(detail, status_code=exc.response.status_code) from exc
        except httpx.RequestError as exc:
            logger.warning("Notion %s %s failed: %s", method, url, exc)
            raise NotionAPIError(f"Request to Notion failed: {exc}") from exc
        return response.json()


def _error_message(response: httpx.Response) -> str:
    """Return the ``message`` field of a Notion error body when present."""

    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"HTTP {response.status_code}"


def create_notion_client(settings: Settings) -> NotionClient:
    """Create a Notion client based on provided settings."""

    return NotionClient(
        settings.notion.token,
        version=settings.notion.version,
        timeout=settings.notion.timeout,
    )


__all__ = [
    "NotionClient",
    "NotionError",
    "NotionAPIError",
    "NotionSchemaError",
    "create_notion_client",
]
