"""Todos API Client"""
from __future__ import annotations

from typing import Any

import httpx
import structlog

from src.domain.todo import TodoItem, TodoUpdate

logger = structlog.get_logger()


class TodosApiError(Exception):
    """
    Todos API 呼び出しエラー

    status_code が None の場合はサーバーに到達できなかったことを表す。
    """

    def __init__(self, status_code: int | None, code: str, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message


class TodosApiClient:
    """
    Todos HTTP API のクライアント

    ID トークンを Bearer として送信する。
    アップロード URL への PUT は署名済みのため認証ヘッダーを付けない。
    """

    def __init__(
        self,
        base_url: str,
        id_token: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={"Authorization": f"Bearer {id_token}"},
            timeout=timeout,
            transport=transport,
        )
        self._upload_client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def get_todos(self) -> list[TodoItem]:
        """Todo 一覧を取得"""
        data = await self._request("GET", "/todos")
        return [TodoItem.from_dict(item) for item in data["items"]]

    async def search_todos(self, keyword: str) -> list[TodoItem]:
        """name が keyword と一致する Todo を取得"""
        data = await self._request("GET", "/todos", params={"keyword": keyword})
        return [TodoItem.from_dict(item) for item in data["items"]]

    async def create_todo(self, name: str, due_date: str) -> TodoItem:
        """Todo を作成"""
        data = await self._request("POST", "/todos", json={"name": name, "dueDate": due_date})
        return TodoItem.from_dict(data["item"])

    async def patch_todo(self, todo_id: str, update: TodoUpdate) -> TodoItem:
        """Todo を更新"""
        data = await self._request("PATCH", f"/todos/{todo_id}", json=update.to_dict())
        return TodoItem.from_dict(data["item"])

    async def delete_todo(self, todo_id: str) -> None:
        """Todo を削除"""
        await self._request("DELETE", f"/todos/{todo_id}")

    async def get_upload_url(self, todo_id: str) -> str:
        """添付ファイルのアップロード URL を取得"""
        data = await self._request("POST", f"/todos/{todo_id}/attachment")
        return data["uploadUrl"]

    async def upload_file(self, upload_url: str, content: bytes) -> None:
        """署名付き URL へファイルを PUT"""
        try:
            response = await self._upload_client.put(upload_url, content=content)
        except httpx.HTTPError as e:
            raise TodosApiError(None, "NETWORK_ERROR", str(e)) from e
        if response.is_error:
            raise TodosApiError(response.status_code, "UPLOAD_FAILED", response.text)

    async def aclose(self) -> None:
        await self._client.aclose()
        await self._upload_client.aclose()

    async def _request(self, method: str, url: str, **kwargs: Any) -> dict[str, Any]:
        log = logger.bind(method=method, url=url)
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            log.error("todos_api_unreachable", error=str(e))
            raise TodosApiError(None, "NETWORK_ERROR", str(e)) from e

        if response.is_error:
            body = _json_or_empty(response)
            log.warning("todos_api_error", status_code=response.status_code, code=body.get("code"))
            raise TodosApiError(
                response.status_code,
                body.get("code", "HTTP_ERROR"),
                body.get("message", response.reason_phrase),
            )

        if response.status_code == 204 or not response.content:
            return {}
        return response.json()


def _json_or_empty(response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}
