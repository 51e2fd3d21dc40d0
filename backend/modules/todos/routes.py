"""
Todo API endpoints.

Every endpoint requires an authenticated caller and scopes its query
to the caller's rows.
"""

from fastapi import APIRouter, Depends, HTTPException, Response

from api.middleware.auth import get_current_user
from api.dependencies import get_todo_service
from shared.models import AuthenticatedUser

from .interfaces import ITodoService
from .models import CreateTodoRequest, Todo, UpdateTodoRequest
from .exceptions import TodoNotFoundError, TodoStoreError

router = APIRouter()


@router.get("", response_model=list[Todo])
async def list_todos(
    user: AuthenticatedUser = Depends(get_current_user),
    service: ITodoService = Depends(get_todo_service),
) -> list[Todo]:
    """
    List the current user's todos, most recent first.
    """
    try:
        return await service.list_todos(user.id)
    except TodoStoreError as e:
        raise HTTPException(status_code=500, detail=e.message)


@router.post("", response_model=Todo, status_code=201)
async def create_todo(
    request: CreateTodoRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ITodoService = Depends(get_todo_service),
) -> Todo:
    """
    Create a new todo for the current user.
    """
    try:
        return await service.create_todo(user.id, request)
    except TodoStoreError as e:
        raise HTTPException(status_code=500, detail=e.message)


@router.delete("", status_code=204)
async def delete_all_todos(
    user: AuthenticatedUser = Depends(get_current_user),
    service: ITodoService = Depends(get_todo_service),
) -> Response:
    """
    Delete every todo owned by the current user.
    """
    try:
        await service.delete_all_todos(user.id)
    except TodoStoreError as e:
        raise HTTPException(status_code=500, detail=e.message)
    return Response(status_code=204)


@router.put("/{todo_id}", response_model=Todo)
async def update_todo(
    todo_id: int,
    request: UpdateTodoRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ITodoService = Depends(get_todo_service),
) -> Todo:
    """
    Replace a todo's task, completion flag and due date.

    A todo owned by another user is reported as not found.
    """
    try:
        return await service.update_todo(str(todo_id), user.id, request)
    except TodoNotFoundError:
        raise HTTPException(status_code=404, detail="Todo not found")
    except TodoStoreError as e:
        raise HTTPException(status_code=500, detail=e.message)


@router.delete("/{todo_id}", status_code=204)
async def delete_todo(
    todo_id: int,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ITodoService = Depends(get_todo_service),
) -> Response:
    """
    Delete a single todo.
    """
    try:
        await service.delete_todo(str(todo_id), user.id)
    except TodoNotFoundError:
        raise HTTPException(status_code=404, detail="Todo not found")
    except TodoStoreError as e:
        raise HTTPException(status_code=500, detail=e.message)
    return Response(status_code=204)
