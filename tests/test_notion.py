import json

import httpx
import pytest

from expense_bot.notion import (
    CategoryRepository,
    ExpenseRecord,
    ExpenseRepository,
    NotionAPIError,
    NotionClient,
    NotionSchemaError,
)

DATABASE_ID = "db-123"


def make_client(handler) -> NotionClient:
    return NotionClient("secret", version="2022-06-28", transport=httpx.MockTransport(handler))


def database_body(prop_type: str = "multi_select") -> dict:
    return {
        "object": "database",
        "properties": {
            "Категория": {
                "type": prop_type,
                prop_type: {"options": [{"name": "Кофе"}, {"name": "Продукты"}]},
            }
        },
    }


@pytest.mark.anyio
async def test_fetch_names_sends_auth_headers() -> None:
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json=database_body())

    repository = CategoryRepository(make_client(handler), DATABASE_ID)

    assert await repository.fetch_names() == ["Кофе", "Продукты"]
    request = captured[0]
    assert request.method == "GET"
    assert request.url.path == f"/v1/databases/{DATABASE_ID}"
    assert request.headers["Authorization"] == "Bearer secret"
    assert request.headers["Notion-Version"] == "2022-06-28"


@pytest.mark.anyio
async def test_fetch_names_requires_multi_select() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=database_body("select"))

    repository = CategoryRepository(make_client(handler), DATABASE_ID)

    with pytest.raises(NotionSchemaError):
        await repository.fetch_names()


@pytest.mark.anyio
async def test_append_option_keeps_existing_options() -> None:
    bodies: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        assert request.method == "PATCH"
        return httpx.Response(200, json=database_body())

    repository = CategoryRepository(make_client(handler), DATABASE_ID)
    await repository.append_option("Такси", ["Кофе", "Продукты"])

    assert bodies == [
        {
            "properties": {
                "Категория": {
                    "multi_select": {
                        "options": [
                            {"name": "Кофе"},
                            {"name": "Продукты"},
                            {"name": "Такси", "color": "black"},
                        ]
                    }
                }
            }
        }
    ]


@pytest.mark.anyio
async def test_create_page_payload() -> None:
    bodies: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        assert request.url.path == "/v1/pages"
        return httpx.Response(200, json={"object": "page", "id": "page-1"})

    repository = ExpenseRepository(make_client(handler), DATABASE_ID)
    record = ExpenseRecord(name="Milk", price=80.5, category="Продукты", date="2025-09-21")

    assert await repository.create(record) == "page-1"
    body = bodies[0]
    assert body["parent"] == {"database_id": DATABASE_ID}
    properties = body["properties"]
    assert properties["Название"] == {"title": [{"text": {"content": "Milk"}}]}
    assert properties["Цена"] == {"number": 80.5}
    assert properties["Категория"] == {"multi_select": [{"name": "Продукты"}]}
    assert properties["Дата"] == {"date": {"start": "2025-09-21"}}
    assert properties["Комментарий"] == {"rich_text": []}


def test_comment_is_rich_text() -> None:
    record = ExpenseRecord(name="Tea", price=1.0, category="X", date="2025-01-01", comment="hi")

    assert record.to_properties()["Комментарий"] == {"rich_text": [{"text": {"content": "hi"}}]}


@pytest.mark.anyio
async def test_http_error_is_wrapped() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            400,
            json={"object": "error", "code": "validation_error", "message": "bad date"},
        )

    client = make_client(handler)

    with pytest.raises(NotionAPIError) as excinfo:
        await client.create_page(DATABASE_ID, {})

    assert excinfo.value.status_code == 400
    assert str(excinfo.value) == "bad date"


@pytest.mark.anyio
async def test_transport_error_is_wrapped() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("boom", request=request)

    client = make_client(handler)

    with pytest.raises(NotionAPIError) as excinfo:
        await client.retrieve_database(DATABASE_ID)

    assert excinfo.value.status_code is None
    await client.close()
