import logging

from application.rest.schemas.input.note_input import ChecklistItemCreate
from application.rest.schemas.input.task_input import TaskCreate, TaskUpdate
from application.rest.schemas.output.common_output import ErrorResponse
from application.rest.schemas.output.task_output import TaskResponse, TasksListResponse
from domain.entities.task import total_progress
from domain.entities.user import AuthenticatedUser
from domain.services.tag_service import TagNotFoundError
from domain.services.task_service import TaskNotFoundError, TaskService
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from utils.dependencies import get_current_user, get_db, get_task_service

from application.utils import build_list_criteria, parse_uuid

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get(
    path="/tasks",
    description="Retrieve the current user's tasks with checklist progress.",
    response_model=TasksListResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": TasksListResponse,
            "description": "Filtered tasks, newest first, with their mean progress.",
        },
        status.HTTP_400_BAD_REQUEST: {
            "model": ErrorResponse,
            "description": "Unknown date window.",
            "content": {
                "application/json": {"example": {"detail": "Invalid date parameter."}}
            },
        },
        status.HTTP_401_UNAUTHORIZED: {
            "model": ErrorResponse,
            "description": "User authentication required.",
            "content": {
                "application/json": {"example": {"detail": "Authentication required"}}
            },
        },
        status.HTTP_500_INTERNAL_SERVER_ERROR: {
            "model": ErrorResponse,
            "description": "Internal server error - database query failed.",
            "content": {
                "application/json": {"example": {"detail": "Failed to retrieve tasks"}}
            },
        },
    },
)
async def get_tasks(
    q: str = "",
    date: str = "all",
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
    task_service: TaskService = Depends(get_task_service),
) -> TasksListResponse:
    """List the user's tasks filtered by text and creation date.

    Args:
        q (str, optional): Matches title or description, case-insensitive.
        date (str, optional): One of all, today, week, month, year.
        db (Session): Database session dependency injected by FastAPI.
        user (AuthenticatedUser): The resolved session user.
        task_service (TaskService): Domain service with injected repositories.

    Returns:
        TasksListResponse: Matching tasks and ``total_progress``, the rounded
        mean progress of those tasks.

    Example:
        >>> result = await get_tasks(date="week", db=db, user=user, task_service=service)
        >>> print(result.total_progress)
        50
    """
    criteria = build_list_criteria(q, date)
    try:
        tasks = await task_service.list_tasks(db, user, criteria)
    except Exception as e:
        logger.error(f"Error listing tasks for user {user.id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve tasks",
        ) from e

    return TasksListResponse(
        tasks=[TaskResponse.from_entity(task) for task in tasks],
        total_progress=total_progress(tasks),
    )


@router.post(
    path="/tasks",
    description="Create a task with an optional tag and initial checklist.",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_201_CREATED: {
            "model": TaskResponse,
            "description": "Task created successfully.",
        },
        status.HTTP_400_BAD_REQUEST: {
            "model": ErrorResponse,
            "description": "Blank title or more than one tag.",
            "content": {
                "application/json": {"example": {"detail": "Task title is required"}}
            },
        },
        status.HTTP_401_UNAUTHORIZED: {
            "model": ErrorResponse,
            "description": "User authentication required.",
        },
        status.HTTP_404_NOT_FOUND: {
            "model": ErrorResponse,
            "description": "Requested tag does not exist.",
        },
        status.HTTP_500_INTERNAL_SERVER_ERROR: {
            "model": ErrorResponse,
            "description": "Internal server error - task creation failed.",
            "content": {
                "application/json": {"example": {"detail": "Failed to create task"}}
            },
        },
    },
)
async def create_task(
    task_data: TaskCreate,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
    task_service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    """Create a task. Blank checklist titles are dropped.

    Example:
        >>> task_data = TaskCreate(title="Move out", checklist=["Boxes", "Van"])
        >>> result = await create_task(task_data, db, user, task_service)
        >>> print(result.total_items, result.progress)
        2 0
    """
    try:
        task = await task_service.create_task(
            db,
            user,
            title=task_data.title,
            description=task_data.description,
            tag_ids=task_data.tag_ids,
            checklist=task_data.checklist,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except TagNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Error creating task: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create task",
        ) from e

    return TaskResponse.from_entity(task)


@router.get(
    path="/tasks/{task_id}",
    description="Retrieve one of the current user's tasks.",
    response_model=TaskResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": TaskResponse,
            "description": "Task retrieved successfully.",
        },
        status.HTTP_400_BAD_REQUEST: {
            "model": ErrorResponse,
            "description": "Invalid UUID format.",
        },
        status.HTTP_404_NOT_FOUND: {
            "model": ErrorResponse,
            "description": "Task not found or owned by another user.",
        },
    },
)
async def get_task(
    task_id: str,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
    task_service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    task_uuid = parse_uuid(task_id)
    try:
        task = await task_service.get_task(db, user, task_uuid)
    except TaskNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Error retrieving task {task_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve task",
        ) from e

    return TaskResponse.from_entity(task)


@router.put(
    path="/tasks/{task_id}",
    description="Update title, description and optionally the tag of a task.",
    response_model=TaskResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": TaskResponse,
            "description": "Task updated successfully.",
        },
        status.HTTP_400_BAD_REQUEST: {
            "model": ErrorResponse,
            "description": "Blank title, invalid UUID or more than one tag.",
        },
        status.HTTP_404_NOT_FOUND: {
            "model": ErrorResponse,
            "description": "Task or tag not found.",
        },
    },
)
async def update_task(
    task_id: str,
    task_update: TaskUpdate,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
    task_service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    task_uuid = parse_uuid(task_id)
    try:
        task = await task_service.update_task(
            db,
            user,
            task_uuid,
            title=task_update.title,
            description=task_update.description,
            tag_ids=task_update.tag_ids,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except (TaskNotFoundError, TagNotFoundError) as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Error updating task {task_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update task",
        ) from e

    return TaskResponse.from_entity(task)


@router.delete(
    path="/tasks/{task_id}",
    description="Delete a task with its checklist.",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        status.HTTP_204_NO_CONTENT: {
            "description": "Task deleted successfully.",
        },
        status.HTTP_404_NOT_FOUND: {
            "model": ErrorResponse,
            "description": "Task not found or owned by another user.",
        },
    },
)
async def delete_task(
    task_id: str,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
    task_service: TaskService = Depends(get_task_service),
) -> Response:
    task_uuid = parse_uuid(task_id)
    try:
        await task_service.delete_task(db, user, task_uuid)
    except TaskNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Error deleting task {task_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete task",
        ) from e

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    path="/tasks/{task_id}/checklist",
    description="Append an item to the task's checklist.",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_201_CREATED: {
            "model": TaskResponse,
            "description": "Item added; the updated task is returned.",
        },
        status.HTTP_400_BAD_REQUEST: {
            "model": ErrorResponse,
            "description": "Blank item title.",
        },
        status.HTTP_404_NOT_FOUND: {
            "model": ErrorResponse,
            "description": "Task not found.",
        },
    },
)
async def add_task_checklist_item(
    task_id: str,
    item: ChecklistItemCreate,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
    task_service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    task_uuid = parse_uuid(task_id)
    try:
        task = await task_service.add_checklist_item(db, user, task_uuid, item.title)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except TaskNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Error adding checklist item to task {task_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add checklist item",
        ) from e

    return TaskResponse.from_entity(task)


@router.post(
    path="/tasks/{task_id}/checklist/{item_id}/toggle",
    description="Flip the completion flag of a task checklist item.",
    response_model=TaskResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": TaskResponse,
            "description": "Item toggled; the updated task and progress are returned.",
        },
        status.HTTP_404_NOT_FOUND: {
            "model": ErrorResponse,
            "description": "Task or checklist item not found.",
        },
    },
)
async def toggle_task_checklist_item(
    task_id: str,
    item_id: str,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
    task_service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    task_uuid = parse_uuid(task_id)
    item_uuid = parse_uuid(item_id)
    try:
        task = await task_service.toggle_checklist_item(db, user, task_uuid, item_uuid)
    except TaskNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Error toggling checklist item {item_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update checklist item",
        ) from e

    return TaskResponse.from_entity(task)


@router.delete(
    path="/tasks/{task_id}/checklist/{item_id}",
    description="Remove an item from the task's checklist.",
    response_model=TaskResponse,
    status_code=status.HTTP_200_OK,
    responses={
        status.HTTP_200_OK: {
            "model": TaskResponse,
            "description": "Item removed; the updated task is returned.",
        },
        status.HTTP_404_NOT_FOUND: {
            "model": ErrorResponse,
            "description": "Task or checklist item not found.",
        },
    },
)
async def delete_task_checklist_item(
    task_id: str,
    item_id: str,
    db: Session = Depends(get_db),
    user: AuthenticatedUser = Depends(get_current_user),
    task_service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    task_uuid = parse_uuid(task_id)
    item_uuid = parse_uuid(item_id)
    try:
        task = await task_service.delete_checklist_item(db, user, task_uuid, item_uuid)
    except TaskNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Error removing checklist item {item_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to remove checklist item",
        ) from e

    return TaskResponse.from_entity(task)
