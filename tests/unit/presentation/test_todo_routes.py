"""Todo API Routes Unit Tests"""
from datetime import datetime

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError
from fastapi.testclient import TestClient
from starlette.requests import Request
import structlog

from src.infrastructure.config import Settings
from src.infrastructure.repositories import InMemoryTodoRepository
from src.presentation.api.dependencies import Container, OwnerIdentityError, get_owner_id
from src.presentation.api.routes.todo_routes import NAME_MAX_LENGTH, OwnerId
from src.presentation.main import create_app


class UnavailableTodoRepository(InMemoryTodoRepository):
    """DynamoDB が応答しない状況を再現する Repository"""

    async def list_by_owner(self, user_id: str):
        raise ClientError(
            {"Error": {"Code": "ServiceUnavailable", "Message": "unavailable"}},
            "Query",
        )


class UnreachableTodoRepository(InMemoryTodoRepository):
    """DynamoDB のエンドポイントへ接続できない状況を再現する Repository"""

    async def list_by_owner(self, user_id: str):
        raise EndpointConnectionError(endpoint_url="https://dynamodb.us-east-1.amazonaws.com")


def _headers(user_id: str = "u1") -> dict[str, str]:
    return {"X-User-Id": user_id}


def _create(client: TestClient, name: str = "learning", user_id: str = "u1") -> dict:
    res = client.post(
        "/todos",
        json={"name": name, "dueDate": "2023-05-09"},
        headers=_headers(user_id),
    )
    assert res.status_code == 201
    return res.json()["item"]


@pytest.fixture
def client(todo_repository, attachment_gateway) -> TestClient:
    app = create_app(
        Container(todo_repository=todo_repository, attachment_gateway=attachment_gateway)
    )
    return TestClient(app)


class TestHealth:
    def test_health_check(self, client):
        res = client.get("/health")

        assert res.status_code == 200
        assert res.json()["status"] == "healthy"
        assert res.json()["backend"] == "memory"


class TestCreateAndList:
    """作成・一覧・検索のテスト"""

    def test_create_todo(self, client):
        """正常: 201 と採番済みの Todo を返す"""
        # Act
        item = _create(client)

        # Assert
        assert item["userId"] == "u1"
        assert item["name"] == "learning"
        assert item["dueDate"] == "2023-05-09"
        assert item["done"] is False
        assert item["todoId"]
        assert item["attachmentUrl"] == f"https://test-bucket.s3.amazonaws.com/{item['todoId']}"
        datetime.fromisoformat(item["createdAt"].replace("Z", "+00:00"))

    def test_list_is_isolated_per_owner(self, client):
        """正常: 一覧は呼び出し元の Todo のみ"""
        # Arrange
        mine = _create(client, name="mine", user_id="u1")
        _create(client, name="theirs", user_id="u2")

        # Act
        res = client.get("/todos", headers=_headers("u1"))

        # Assert
        assert res.status_code == 200
        assert res.json()["items"] == [mine]

    def test_search_by_keyword_is_exact(self, client):
        """正常: keyword は name の完全一致"""
        # Arrange
        exact = _create(client, name="learning")
        _create(client, name="learning plan")

        # Act
        res = client.get("/todos", params={"keyword": "learning"}, headers=_headers())

        # Assert
        assert res.status_code == 200
        assert res.json()["items"] == [exact]

    def test_blank_keyword_lists_all(self, client):
        """正常: 空白のみの keyword は一覧扱い"""
        _create(client, name="a")
        _create(client, name="b")

        res = client.get("/todos", params={"keyword": "  "}, headers=_headers())

        assert [item["name"] for item in res.json()["items"]] == ["a", "b"]

    def test_round_trip_get(self, client):
        """正常: 作成した Todo を取得すると同じ内容"""
        created = _create(client)

        res = client.get(f"/todos/{created['todoId']}", headers=_headers())

        assert res.status_code == 200
        assert res.json()["item"] == created


class TestUpdate:
    """更新のテスト"""

    def test_toggle_done(self, client):
        """正常: done のみ変わり、一覧にも反映される"""
        # Arrange
        created = _create(client)

        # Act
        res = client.patch(
            f"/todos/{created['todoId']}",
            json={"name": "learning", "dueDate": "2023-05-09", "done": True},
            headers=_headers(),
        )

        # Assert
        assert res.status_code == 200
        assert res.json()["item"] == {**created, "done": True}
        listed = client.get("/todos", headers=_headers()).json()["items"]
        assert len(listed) == 1
        assert listed[0]["done"] is True
        assert listed[0]["name"] == "learning"

    def test_update_missing_todo(self, client):
        """異常: 存在しない Todo は 404"""
        res = client.patch(
            "/todos/missing",
            json={"name": "x", "dueDate": "2023-05-09", "done": True},
            headers=_headers(),
        )

        assert res.status_code == 404
        assert res.json()["code"] == "TODO_NOT_FOUND"

    def test_update_other_owners_todo(self, client):
        """異常: 他の所有者の Todo は 404 で、内容は変わらない"""
        created = _create(client, user_id="u1")

        res = client.patch(
            f"/todos/{created['todoId']}",
            json={"name": "hijack", "dueDate": "2023-05-09", "done": True},
            headers=_headers("u2"),
        )

        assert res.status_code == 404
        fetched = client.get(f"/todos/{created['todoId']}", headers=_headers("u1")).json()
        assert fetched["item"]["name"] == "learning"

    @pytest.mark.parametrize(
        "payload",
        [
            {"name": "x", "dueDate": "2023-05-09"},
            {"name": "x", "dueDate": "2023-05-09", "done": True, "createdAt": "2000-01-01"},
            {"name": "x", "dueDate": "2023-05-09", "done": True, "attachmentUrl": "https://x"},
        ],
    )
    def test_update_rejects_malformed_payload(self, client, payload):
        """異常: 必須フィールド不足や未知フィールドは 422"""
        created = _create(client)

        res = client.patch(f"/todos/{created['todoId']}", json=payload, headers=_headers())

        assert res.status_code == 422
        assert res.json()["code"] == "VALIDATION_ERROR"


class TestValidation:
    """リクエスト検証のテスト"""

    @pytest.mark.parametrize(
        "payload",
        [
            {"name": "   ", "dueDate": "2023-05-09"},
            {"name": "x", "dueDate": "2023-13-40"},
            {"name": "x", "dueDate": "May 9"},
            {"dueDate": "2023-05-09"},
        ],
    )
    def test_create_rejects_malformed_payload(self, client, payload):
        """異常: 不正な作成リクエストは 422"""
        res = client.post("/todos", json=payload, headers=_headers())

        assert res.status_code == 422
        body = res.json()
        assert body["error"] == "ValidationError"
        assert isinstance(body["detail"], list)

    def test_create_strips_name(self, client):
        """正常: name の前後の空白は除去される"""
        res = client.post(
            "/todos", json={"name": "  learning  ", "dueDate": "2023-05-09"}, headers=_headers()
        )

        assert res.json()["item"]["name"] == "learning"

    def test_name_length_is_checked_after_strip(self, client):
        """正常: 上限ちょうどの name は前後の空白があっても受け付ける"""
        name = "a" * NAME_MAX_LENGTH

        res = client.post(
            "/todos", json={"name": f"  {name}  ", "dueDate": "2023-05-09"}, headers=_headers()
        )

        assert res.status_code == 201
        assert res.json()["item"]["name"] == name

    def test_name_over_max_length(self, client):
        """異常: 空白を除いて上限を超える name は 422"""
        res = client.post(
            "/todos",
            json={"name": "a" * (NAME_MAX_LENGTH + 1), "dueDate": "2023-05-09"},
            headers=_headers(),
        )

        assert res.status_code == 422
        assert res.json()["code"] == "VALIDATION_ERROR"


class TestDelete:
    """削除のテスト"""

    def test_delete_then_get_is_not_found(self, client):
        """正常: 204 の後の取得は 404"""
        created = _create(client)

        res = client.delete(f"/todos/{created['todoId']}", headers=_headers())

        assert res.status_code == 204
        assert res.text == ""
        assert client.get(f"/todos/{created['todoId']}", headers=_headers()).status_code == 404

    def test_delete_missing_is_idempotent(self, client):
        """正常: 存在しない Todo の削除も 204"""
        assert client.delete("/todos/missing", headers=_headers()).status_code == 204


class TestAttachment:
    """アップロード URL のテスト"""

    def test_generate_upload_url(self, client, attachment_gateway):
        """正常: 201 と uploadUrl を返す"""
        created = _create(client)

        res = client.post(f"/todos/{created['todoId']}/attachment", headers=_headers())

        assert res.status_code == 201
        assert res.json()["uploadUrl"].startswith(created["attachmentUrl"])
        assert attachment_gateway.upload_requests == [created["todoId"]]

    def test_generate_upload_url_for_missing_todo(self, client):
        """異常: 存在しない Todo は 404"""
        res = client.post("/todos/missing/attachment", headers=_headers())

        assert res.status_code == 404


class TestErrors:
    """エラー応答のテスト"""

    def test_missing_identity_is_unauthorized(self, client):
        """異常: 所有者を特定できなければ 401"""
        res = client.get("/todos")

        assert res.status_code == 401
        assert res.json()["code"] == "UNAUTHORIZED"

    @pytest.mark.parametrize(
        "repository_class",
        [UnavailableTodoRepository, UnreachableTodoRepository],
    )
    def test_store_unavailable(self, attachment_gateway, repository_class):
        """異常: ClientError / BotoCoreError のストア障害は 503"""
        app = create_app(
            Container(
                todo_repository=repository_class(),
                attachment_gateway=attachment_gateway,
            )
        )

        res = TestClient(app).get("/todos", headers=_headers())

        assert res.status_code == 503
        assert res.json()["code"] == "STORE_UNAVAILABLE"

    def test_request_id_header(self, client):
        """正常: X-Request-ID をそのまま返す"""
        res = client.get("/health", headers={"X-Request-ID": "req-1"})

        assert res.headers["X-Request-ID"] == "req-1"


class TestOwnerIdentity:
    """所有者IDの解決のテスト"""

    @staticmethod
    def _request(event: dict | None = None, headers: dict[str, str] | None = None) -> Request:
        scope = {
            "type": "http",
            "method": "GET",
            "path": "/todos",
            "headers": [
                (k.lower().encode(), v.encode()) for k, v in (headers or {}).items()
            ],
        }
        if event is not None:
            scope["aws.event"] = event
        return Request(scope)

    @pytest.mark.asyncio
    async def test_principal_id_from_lambda_authorizer(self):
        """正常: Lambda オーソライザの principalId を使う"""
        event = {"requestContext": {"authorizer": {"principalId": "google-oauth2|1"}}}

        owner_id = await get_owner_id(self._request(event), Settings(environment="production"))

        assert owner_id == "google-oauth2|1"

    @pytest.mark.asyncio
    async def test_sub_from_jwt_claims(self):
        """正常: JWT オーソライザの claims.sub を使う"""
        event = {"requestContext": {"authorizer": {"jwt": {"claims": {"sub": "u9"}}}}}

        owner_id = await get_owner_id(self._request(event), Settings(environment="production"))

        assert owner_id == "u9"

    @pytest.mark.asyncio
    async def test_header_is_ignored_in_production(self):
        """異常: 本番環境では X-User-Id ヘッダーを受け付けない"""
        request = self._request(headers={"X-User-Id": "u1"})

        with pytest.raises(OwnerIdentityError):
            await get_owner_id(request, Settings(environment="production"))

    def test_user_id_is_bound_to_request_logs(self, todo_repository, attachment_gateway):
        """正常: ルート内のログコンテキストに user_id と request_id が載る"""
        # Arrange
        app = create_app(
            Container(todo_repository=todo_repository, attachment_gateway=attachment_gateway)
        )

        @app.get("/whoami")
        async def whoami(owner_id: OwnerId) -> dict:
            return structlog.contextvars.get_contextvars()

        # Act
        res = TestClient(app).get(
            "/whoami", headers={**_headers("u1"), "X-Request-ID": "req-1"}
        )

        # Assert
        assert res.status_code == 200
        assert res.json() == {"request_id": "req-1", "user_id": "u1"}
