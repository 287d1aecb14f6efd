"""Todo API Routes"""
from __future__ import annotations

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from src.application.ports.gateways import IAttachmentGateway
from src.application.ports.repositories import ITodoRepository
from src.application.use_cases.todo import (
    CreateTodoInput,
    CreateTodoUseCase,
    DeleteTodoUseCase,
    GenerateUploadUrlUseCase,
    GetTodoUseCase,
    GetTodosUseCase,
    SearchTodosUseCase,
    UpdateTodoInput,
    UpdateTodoUseCase,
)
from src.domain.todo import TodoItem, TodoUpdate
from src.presentation.api.dependencies import (
    get_attachment_gateway,
    get_owner_id,
    get_todo_repository,
)

router = APIRouter()

NAME_MAX_LENGTH = 200

OwnerId = Annotated[str, Depends(get_owner_id)]
TodoRepository = Annotated[ITodoRepository, Depends(get_todo_repository)]
AttachmentGateway = Annotated[IAttachmentGateway, Depends(get_attachment_gateway)]


# === Request/Response Models ===


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class _TodoFields(_CamelModel):
    """name / dueDate の共通バリデーション"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    name: str = Field(..., description="タイトル（前後の空白を除いて 200 文字以内）")
    due_date: str = Field(..., description="期日 (YYYY-MM-DD)", pattern=r"^\d{4}-\d{2}-\d{2}$")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        s = v.strip()
        if not s:
            raise ValueError("name must not be blank")
        if len(s) > NAME_MAX_LENGTH:
            raise ValueError(f"name must be at most {NAME_MAX_LENGTH} characters")
        return s

    @field_validator("due_date")
    @classmethod
    def validate_due_date(cls, v: str) -> str:
        date.fromisoformat(v)
        return v


class CreateTodoRequest(_TodoFields):
    """作成リクエスト"""


class UpdateTodoRequest(_TodoFields):
    """更新リクエスト（name / dueDate / done はすべて必須）"""

    done: bool = Field(..., description="完了フラグ")

    def to_update(self) -> TodoUpdate:
        return TodoUpdate(name=self.name, due_date=self.due_date, done=self.done)


class TodoResponse(_CamelModel):
    """Todo レスポンス"""

    user_id: str
    todo_id: str
    name: str
    due_date: str
    created_at: str
    done: bool
    attachment_url: str | None = None

    @classmethod
    def from_item(cls, item: TodoItem) -> TodoResponse:
        return cls.model_validate(item.to_dict())


class TodoItemResponse(BaseModel):
    """単一 Todo のエンベロープ"""

    item: TodoResponse


class TodoListResponse(BaseModel):
    """Todo 一覧のエンベロープ"""

    items: list[TodoResponse]


class UploadUrlResponse(_CamelModel):
    """アップロード URL レスポンス"""

    upload_url: str


# === Routes ===


@router.get("", response_model=TodoListResponse)
async def get_todos(
    owner_id: OwnerId,
    todo_repository: TodoRepository,
    keyword: Annotated[
        str | None, Query(description="name と完全一致する Todo のみ返す")
    ] = None,
) -> TodoListResponse:
    """Todo 一覧を取得（keyword 指定時は検索）"""
    if keyword and keyword.strip():
        items = await SearchTodosUseCase(todo_repository).execute(owner_id, keyword)
    else:
        items = await GetTodosUseCase(todo_repository).execute(owner_id)

    return TodoListResponse(items=[TodoResponse.from_item(item) for item in items])


@router.post("", response_model=TodoItemResponse, status_code=status.HTTP_201_CREATED)
async def create_todo(
    request: CreateTodoRequest,
    owner_id: OwnerId,
    todo_repository: TodoRepository,
    attachment_gateway: AttachmentGateway,
) -> TodoItemResponse:
    """Todo を作成"""
    use_case = CreateTodoUseCase(
        todo_repository=todo_repository,
        attachment_gateway=attachment_gateway,
    )

    item = await use_case.execute(
        CreateTodoInput(user_id=owner_id, name=request.name, due_date=request.due_date)
    )

    return TodoItemResponse(item=TodoResponse.from_item(item))


@router.get("/{todo_id}", response_model=TodoItemResponse)
async def get_todo(
    todo_id: str,
    owner_id: OwnerId,
    todo_repository: TodoRepository,
) -> TodoItemResponse:
    """Todo を1件取得"""
    item = await GetTodoUseCase(todo_repository).execute(owner_id, todo_id)
    return TodoItemResponse(item=TodoResponse.from_item(item))


@router.patch("/{todo_id}", response_model=TodoItemResponse)
async def update_todo(
    todo_id: str,
    request: UpdateTodoRequest,
    owner_id: OwnerId,
    todo_repository: TodoRepository,
) -> TodoItemResponse:
    """Todo を更新"""
    item = await UpdateTodoUseCase(todo_repository).execute(
        UpdateTodoInput(user_id=owner_id, todo_id=todo_id, update=request.to_update())
    )
    return TodoItemResponse(item=TodoResponse.from_item(item))


@router.delete("/{todo_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_todo(
    todo_id: str,
    owner_id: OwnerId,
    todo_repository: TodoRepository,
) -> Response:
    """Todo を削除"""
    await DeleteTodoUseCase(todo_repository).execute(owner_id, todo_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{todo_id}/attachment",
    response_model=UploadUrlResponse,
    status_code=status.HTTP_201_CREATED,
)
async def generate_upload_url(
    todo_id: str,
    owner_id: OwnerId,
    todo_repository: TodoRepository,
    attachment_gateway: AttachmentGateway,
) -> UploadUrlResponse:
    """添付ファイルのアップロード URL を生成"""
    use_case = GenerateUploadUrlUseCase(
        todo_repository=todo_repository,
        attachment_gateway=attachment_gateway,
    )

    upload_url = await use_case.execute(owner_id, todo_id)

    return UploadUrlResponse(upload_url=upload_url)
