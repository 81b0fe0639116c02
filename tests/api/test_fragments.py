"""HTTP tests for /v1/fragments."""

import pytest
from httpx import AsyncClient

from app.core.config import get_settings

BASE = "/v1/fragments"


async def _create(client: AsyncClient, headers: dict, body: bytes, content_type: str) -> dict:
    response = await client.post(BASE, content=body, headers={**headers, "Content-Type": content_type})
    assert response.status_code == 201, response.text
    return response.json()["fragment"]


class TestAuth:
    @pytest.mark.parametrize(
        "method,path",
        [("GET", BASE), ("POST", BASE), ("GET", f"{BASE}/x"), ("GET", f"{BASE}/x/info"), ("DELETE", f"{BASE}/x")],
    )
    async def test_owner_header_required(self, client: AsyncClient, method: str, path: str) -> None:
        response = await client.request(method, path, content=b"x", headers={"Content-Type": "text/plain"})
        assert response.status_code == 401
        assert response.json()["error"] == "AUTHENTICATION_ERROR"

    async def test_blank_owner_header(self, client: AsyncClient) -> None:
        response = await client.get(BASE, headers={get_settings().owner_header_name: "   "})
        assert response.status_code == 401


class TestCreate:
    async def test_created(self, client: AsyncClient, owner_headers: dict, owner_id: str) -> None:
        response = await client.post(
            BASE, content=b"hello", headers={**owner_headers, "Content-Type": "text/plain"}
        )
        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "ok"
        fragment = body["fragment"]
        assert fragment["ownerId"] == owner_id
        assert fragment["type"] == "text/plain"
        assert fragment["size"] == 5
        assert fragment["created"] == fragment["updated"]
        assert response.headers["location"] == f"http://test{BASE}/{fragment['id']}"

    async def test_owner_id_is_not_the_principal(self, client: AsyncClient, owner_headers: dict) -> None:
        fragment = await _create(client, owner_headers, b"x", "text/plain")
        assert "@" not in fragment["ownerId"]

    async def test_keeps_charset(self, client: AsyncClient, owner_headers: dict) -> None:
        fragment = await _create(client, owner_headers, b"x", "text/plain; charset=utf-8")
        assert fragment["type"] == "text/plain; charset=utf-8"

    async def test_quoted_parameter(self, client: AsyncClient, owner_headers: dict) -> None:
        fragment = await _create(client, owner_headers, b"x", 'text/plain; foo="a;b"')
        assert fragment["type"] == 'text/plain; foo="a;b"'
        response = await client.get(f"{BASE}/{fragment['id']}/info", headers=owner_headers)
        assert response.json()["fragment"]["type"] == 'text/plain; foo="a;b"'

    async def test_empty_body(self, client: AsyncClient, owner_headers: dict) -> None:
        fragment = await _create(client, owner_headers, b"", "text/markdown")
        assert fragment["size"] == 0

    async def test_unsupported_type(self, client: AsyncClient, owner_headers: dict) -> None:
        response = await client.post(
            BASE, content=b"\x89PNG", headers={**owner_headers, "Content-Type": "image/png"}
        )
        assert response.status_code == 415
        body = response.json()
        assert body["status"] == "error"
        assert body["error"] == "UNSUPPORTED_TYPE"

    async def test_malformed_type(self, client: AsyncClient, owner_headers: dict) -> None:
        response = await client.post(
            BASE, content=b"x", headers={**owner_headers, "Content-Type": "text/plain; charset"}
        )
        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"

    async def test_too_large(self, client: AsyncClient, owner_headers: dict) -> None:
        body = b"x" * (get_settings().max_fragment_size + 1)
        response = await client.post(BASE, content=body, headers={**owner_headers, "Content-Type": "text/plain"})
        assert response.status_code == 413
        assert response.json()["error"] == "PAYLOAD_TOO_LARGE"


class TestList:
    async def test_empty(self, client: AsyncClient, owner_headers: dict) -> None:
        response = await client.get(BASE, headers=owner_headers)
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "fragments": []}

    async def test_ids(self, client: AsyncClient, owner_headers: dict) -> None:
        first = await _create(client, owner_headers, b"a", "text/plain")
        second = await _create(client, owner_headers, b"b", "text/plain")
        response = await client.get(BASE, headers=owner_headers)
        assert response.json()["fragments"] == [first["id"], second["id"]]

    async def test_expanded(self, client: AsyncClient, owner_headers: dict) -> None:
        created = await _create(client, owner_headers, b"# T", "text/markdown")
        response = await client.get(BASE, params={"expand": "1"}, headers=owner_headers)
        assert response.status_code == 200
        assert response.json()["fragments"] == [created]

    @pytest.mark.parametrize("expand", ["0", "2", "abc", "true", ""])
    async def test_expand_other_than_1_lists_ids(
        self, client: AsyncClient, owner_headers: dict, expand: str
    ) -> None:
        created = await _create(client, owner_headers, b"a", "text/plain")
        response = await client.get(BASE, params={"expand": expand}, headers=owner_headers)
        assert response.status_code == 200
        assert response.json()["fragments"] == [created["id"]]

    async def test_only_own_fragments(
        self, client: AsyncClient, owner_headers: dict, other_owner_headers: dict
    ) -> None:
        await _create(client, owner_headers, b"a", "text/plain")
        response = await client.get(BASE, headers=other_owner_headers)
        assert response.json()["fragments"] == []


class TestGet:
    async def test_raw_data_with_charset(self, client: AsyncClient, owner_headers: dict) -> None:
        created = await _create(client, owner_headers, b"hello", "text/plain")
        response = await client.get(f"{BASE}/{created['id']}", headers=owner_headers)
        assert response.status_code == 200
        assert response.content == b"hello"
        assert response.headers["content-type"] == "text/plain; charset=utf-8"

    async def test_raw_json(self, client: AsyncClient, owner_headers: dict) -> None:
        created = await _create(client, owner_headers, b'{"a":1}', "application/json")
        response = await client.get(f"{BASE}/{created['id']}", headers=owner_headers)
        assert response.content == b'{"a":1}'
        assert response.headers["content-type"] == "application/json; charset=utf-8"

    async def test_info(self, client: AsyncClient, owner_headers: dict) -> None:
        created = await _create(client, owner_headers, b"hello", "text/csv")
        response = await client.get(f"{BASE}/{created['id']}/info", headers=owner_headers)
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "fragment": created}

    async def test_missing(self, client: AsyncClient, owner_headers: dict) -> None:
        response = await client.get(f"{BASE}/missing", headers=owner_headers)
        assert response.status_code == 404
        assert response.json()["error"] == "RESOURCE_NOT_FOUND"

    async def test_info_missing(self, client: AsyncClient, owner_headers: dict) -> None:
        response = await client.get(f"{BASE}/missing/info", headers=owner_headers)
        assert response.status_code == 404

    async def test_other_owner_cannot_read(
        self, client: AsyncClient, owner_headers: dict, other_owner_headers: dict
    ) -> None:
        created = await _create(client, owner_headers, b"secret", "text/plain")
        response = await client.get(f"{BASE}/{created['id']}", headers=other_owner_headers)
        assert response.status_code == 404


class TestConvert:
    async def test_markdown_as_html(self, client: AsyncClient, owner_headers: dict) -> None:
        created = await _create(client, owner_headers, b"# Title\n\n**bold**", "text/markdown")
        response = await client.get(f"{BASE}/{created['id']}.html", headers=owner_headers)
        assert response.status_code == 200
        assert response.headers["content-type"] == "text/html; charset=utf-8"
        assert b"<h1>Title</h1>" in response.content
        assert b"<strong>bold</strong>" in response.content

    async def test_markdown_as_text(self, client: AsyncClient, owner_headers: dict) -> None:
        created = await _create(client, owner_headers, b"# Title", "text/markdown")
        response = await client.get(f"{BASE}/{created['id']}.txt", headers=owner_headers)
        assert response.status_code == 200
        assert response.content == b"# Title"

    async def test_html_as_text(self, client: AsyncClient, owner_headers: dict) -> None:
        created = await _create(client, owner_headers, b"<p>Hello <b>there</b></p>", "text/html")
        response = await client.get(f"{BASE}/{created['id']}.txt", headers=owner_headers)
        assert response.content == b"Hello there"
        assert response.headers["content-type"] == "text/plain; charset=utf-8"

    async def test_same_type_extension(self, client: AsyncClient, owner_headers: dict) -> None:
        created = await _create(client, owner_headers, b"a,b\n1,2\n", "text/csv")
        response = await client.get(f"{BASE}/{created['id']}.csv", headers=owner_headers)
        assert response.status_code == 200
        assert response.content == b"a,b\n1,2\n"

    async def test_unreachable_target(self, client: AsyncClient, owner_headers: dict) -> None:
        created = await _create(client, owner_headers, b"plain", "text/plain")
        response = await client.get(f"{BASE}/{created['id']}.html", headers=owner_headers)
        assert response.status_code == 415
        body = response.json()
        assert body["error"] == "CONVERSION_UNSUPPORTED"
        assert body["details"] == {"source_type": "text/plain", "target_type": "text/html"}

    async def test_unknown_extension(self, client: AsyncClient, owner_headers: dict) -> None:
        created = await _create(client, owner_headers, b"plain", "text/plain")
        response = await client.get(f"{BASE}/{created['id']}.png", headers=owner_headers)
        assert response.status_code == 415
        assert response.json()["error"] == "UNSUPPORTED_TYPE"

    async def test_missing_fragment(self, client: AsyncClient, owner_headers: dict) -> None:
        response = await client.get(f"{BASE}/missing.txt", headers=owner_headers)
        assert response.status_code == 404


class TestDelete:
    async def test_delete(self, client: AsyncClient, owner_headers: dict) -> None:
        created = await _create(client, owner_headers, b"bye", "text/plain")
        response = await client.delete(f"{BASE}/{created['id']}", headers=owner_headers)
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}
        response = await client.get(f"{BASE}/{created['id']}", headers=owner_headers)
        assert response.status_code == 404

    async def test_delete_missing(self, client: AsyncClient, owner_headers: dict) -> None:
        response = await client.delete(f"{BASE}/missing", headers=owner_headers)
        assert response.status_code == 404

    async def test_other_owner_cannot_delete(
        self, client: AsyncClient, owner_headers: dict, other_owner_headers: dict
    ) -> None:
        created = await _create(client, owner_headers, b"keep", "text/plain")
        response = await client.delete(f"{BASE}/{created['id']}", headers=other_owner_headers)
        assert response.status_code == 404
        response = await client.get(f"{BASE}/{created['id']}", headers=owner_headers)
        assert response.status_code == 200
