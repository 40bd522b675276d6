"""Task management CRUD routes."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ..deps import get_task_store
from ..errors import NotFoundError, PersistenceError, ValidationError
from ..models.task import Task
from ..schemas import TaskCreate, TaskUpdate
from ..services.task_store import TaskStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["tasks"])


# Handlers are plain functions: FastAPI runs them on its thread pool, so a
# request waiting on the store lock does not stall the event loop.


@router.get("", response_model=List[Task])
def list_tasks(task_store: TaskStore = Depends(get_task_store)) -> List[Task]:
    """List all tasks in storage order."""
    return task_store.list_tasks()


@router.post("", response_model=Task, status_code=status.HTTP_201_CREATED)
def create_task(
    task_data: TaskCreate,
    task_store: TaskStore = Depends(get_task_store)
) -> Task:
    """Create a new task.

    Args:
        task_data: Task creation data
        task_store: Task store instance

    Returns:
        Created task

    Raises:
        HTTPException: 400 on invalid data, 500 if the snapshot write fails
    """
    try:
        return task_store.create_task(task_data)

    except ValidationError as e:
        logger.debug(f"Rejected task creation: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except PersistenceError as e:
        logger.debug(f"Task created but not persisted: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )


@router.put("/{task_id}", response_model=Task)
def update_task(
    task_id: str,
    task_data: TaskUpdate,
    task_store: TaskStore = Depends(get_task_store)
) -> Task:
    """Update a task.

    Args:
        task_id: Task ID
        task_data: Task update data, empty fields are ignored
        task_store: Task store instance

    Returns:
        Updated task

    Raises:
        HTTPException: 404 if not found, 400 on invalid status, 500 if the
            snapshot write fails
    """
    try:
        return task_store.update_task(task_id, task_data)

    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    except ValidationError as e:
        logger.debug(f"Rejected update of task {task_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )
    except PersistenceError as e:
        logger.debug(f"Task {task_id} updated but not persisted: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: str,
    task_store: TaskStore = Depends(get_task_store)
) -> Response:
    """Delete a task.

    Raises:
        HTTPException: 404 if not found, 500 if the snapshot write fails
    """
    try:
        task_store.delete_task(task_id)

    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e)
        )
    except PersistenceError as e:
        logger.debug(f"Task {task_id} deleted but not persisted: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )

    return Response(status_code=status.HTTP_204_NO_CONTENT)
