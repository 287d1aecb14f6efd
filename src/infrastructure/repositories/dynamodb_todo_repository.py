"""DynamoDB Todo Repository Implementation"""
from __future__ import annotations

from typing import Any

import boto3
from boto3.dynamodb.conditions import Attr, ConditionBase, Key
from botocore.config import Config
from botocore.exceptions import ClientError
import structlog

from src.application.ports.repositories import ITodoRepository
from src.domain.todo import TodoItem, TodoNotFoundError, TodoUpdate

logger = structlog.get_logger()


class DynamoDBTodoRepository(ITodoRepository):
    """
    DynamoDB ベースの Todo Repository

    テーブルのキーは (userId, todoId)。
    所有者ごとの一覧は userId をパーティションキーとする GSI を Query する。
    ストアのエラー（ClientError 等）は変換せずに呼び出し元へ伝播する。
    """

    def __init__(
        self,
        table_name: str = "todos",
        index_name: str = "todos-user-index",
        region: str = "us-east-1",
        config: Config | None = None,
        table: Any = None,
    ):
        self.table_name = table_name
        self.index_name = index_name
        if table is None:
            dynamodb = boto3.resource("dynamodb", region_name=region, config=config)
            table = dynamodb.Table(table_name)
        self._table = table

    async def list_by_owner(self, user_id: str) -> list[TodoItem]:
        """所有者の Todo をすべて取得"""
        log = logger.bind(user_id=user_id)
        log.info("listing_todos")

        items = self._query_by_owner(user_id)

        log.info("todos_listed", count=len(items))
        return items

    async def find_by_owner_and_name(self, user_id: str, text: str) -> list[TodoItem]:
        """
        name が完全一致する Todo を取得

        GSI の Query に FilterExpression を付与する。
        """
        log = logger.bind(user_id=user_id, text=text)
        log.info("searching_todos")

        items = self._query_by_owner(user_id, filter_expression=Attr("name").eq(text))

        log.info("todos_found", count=len(items))
        return items

    async def get(self, user_id: str, todo_id: str) -> TodoItem | None:
        """複合キーで1件取得"""
        log = logger.bind(user_id=user_id, todo_id=todo_id)
        log.info("getting_todo")

        response = self._table.get_item(Key=self._key(todo_id, user_id))
        item = response.get("Item")
        if item is None:
            log.info("todo_not_found")
            return None

        return TodoItem.from_dict(item)

    async def create(self, item: TodoItem) -> TodoItem:
        """Todo を保存"""
        log = logger.bind(user_id=item.user_id, todo_id=item.todo_id)
        log.info("creating_todo")

        self._table.put_item(Item=item.to_dict())

        log.info("todo_created")
        return item

    async def update(self, todo_id: str, user_id: str, update: TodoUpdate) -> TodoItem:
        """
        name / dueDate / done を上書き

        存在しないキーに対して項目が新規作成されないよう
        attribute_exists 条件を付けて更新する。
        """
        log = logger.bind(user_id=user_id, todo_id=todo_id)
        log.info("updating_todo")

        response = self._conditional_update(
            todo_id,
            user_id,
            UpdateExpression="SET #name = :name, dueDate = :dueDate, done = :done",
            ExpressionAttributeNames={"#name": "name"},
            ExpressionAttributeValues={
                ":name": update.name,
                ":dueDate": update.due_date,
                ":done": update.done,
            },
            ReturnValues="ALL_NEW",
        )

        log.info("todo_updated")
        return TodoItem.from_dict(response["Attributes"])

    async def update_attachment_url(
        self, todo_id: str, user_id: str, attachment_url: str
    ) -> None:
        """attachmentUrl のみを上書き"""
        log = logger.bind(user_id=user_id, todo_id=todo_id)
        log.info("updating_attachment_url")

        self._conditional_update(
            todo_id,
            user_id,
            UpdateExpression="SET attachmentUrl = :attachmentUrl",
            ExpressionAttributeValues={":attachmentUrl": attachment_url},
        )

        log.info("attachment_url_updated")

    async def delete(self, todo_id: str, user_id: str) -> None:
        """Todo を削除（存在しなくてもエラーにしない）"""
        log = logger.bind(user_id=user_id, todo_id=todo_id)
        log.info("deleting_todo")

        self._table.delete_item(Key=self._key(todo_id, user_id))

        log.info("todo_deleted")

    def _query_by_owner(
        self,
        user_id: str,
        filter_expression: ConditionBase | None = None,
    ) -> list[TodoItem]:
        """GSI を Query し、LastEvaluatedKey がなくなるまでページを辿る"""
        params: dict[str, Any] = {
            "IndexName": self.index_name,
            "KeyConditionExpression": Key("userId").eq(user_id),
        }
        if filter_expression is not None:
            params["FilterExpression"] = filter_expression

        items: list[TodoItem] = []
        while True:
            response = self._table.query(**params)
            items.extend(TodoItem.from_dict(item) for item in response.get("Items", []))

            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                return items
            params["ExclusiveStartKey"] = last_key

    def _conditional_update(self, todo_id: str, user_id: str, **kwargs: Any) -> dict[str, Any]:
        """キーの存在を条件に update_item を実行"""
        try:
            return self._table.update_item(
                Key=self._key(todo_id, user_id),
                ConditionExpression="attribute_exists(todoId)",
                **kwargs,
            )
        except ClientError as e:
            if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
                logger.warning("todo_not_found", user_id=user_id, todo_id=todo_id)
                raise TodoNotFoundError(todo_id, user_id) from e
            logger.error("update_todo_failed", todo_id=todo_id, error=str(e))
            raise

    @staticmethod
    def _key(todo_id: str, user_id: str) -> dict[str, str]:
        return {"userId": user_id, "todoId": todo_id}
