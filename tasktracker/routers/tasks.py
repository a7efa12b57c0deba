# tasktracker/routers/tasks.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from tasktracker.dependencies import get_task_service
from tasktracker.exceptions import TaskTrackerError
from tasktracker.models.task import TaskStatus
from tasktracker.schemas.task import MessageOut, TaskCreate, TaskListOut, TaskOut, TaskUpdate
from tasktracker.schemas.user import UserOut
from tasktracker.services.task_service import TaskFilters, TaskPatch, TaskService
from tasktracker.utils.auth import get_current_identity, require_admin
from tasktracker.utils.security import Identity

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=TaskOut, status_code=status.HTTP_201_CREATED)
def create_task(
    task: TaskCreate,
    identity: Identity = Depends(require_admin),
    service: TaskService = Depends(get_task_service),
):
    try:
        view = service.create_task(
            title=task.title,
            description=task.description,
            assigned_to=task.assigned_to,
            due_date=task.due_date,
        )
        return TaskOut.from_view(view)
    except TaskTrackerError:
        raise
    except Exception:
        logger.exception("Error in create_task")
        raise HTTPException(status_code=500, detail="Task creation failed")


@router.get("", response_model=TaskListOut)
def list_tasks(
    status: Optional[TaskStatus] = None,
    assigned_to: Optional[str] = Query(None, alias="assignedTo"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    identity: Identity = Depends(get_current_identity),
    service: TaskService = Depends(get_task_service),
):
    """Tasks visible to the caller; employees only get their own"""
    try:
        result = service.list_tasks(
            TaskFilters(status=status, assigned_to=assigned_to, page=page, limit=limit),
            identity,
        )
        return {
            "tasks": [TaskOut.from_view(view) for view in result["tasks"]],
            "pagination": result["pagination"],
        }
    except TaskTrackerError:
        raise
    except Exception:
        logger.exception("Error in list_tasks")
        raise HTTPException(status_code=500, detail="Could not fetch tasks")


@router.get("/users", response_model=List[UserOut])
def list_employees(
    identity: Identity = Depends(require_admin),
    service: TaskService = Depends(get_task_service),
):
    """Employees available for assignment"""
    try:
        return service.list_employees()
    except TaskTrackerError:
        raise
    except Exception:
        logger.exception("Error in list_employees")
        raise HTTPException(status_code=500, detail="Could not fetch users")


@router.get("/{task_id}", response_model=TaskOut)
def get_task(
    task_id: str,
    identity: Identity = Depends(get_current_identity),
    service: TaskService = Depends(get_task_service),
):
    try:
        return TaskOut.from_view(service.get_task(task_id, identity))
    except TaskTrackerError:
        raise
    except Exception:
        logger.exception("Error in get_task")
        raise HTTPException(status_code=500, detail="Could not fetch task")


@router.put("/{task_id}", response_model=TaskOut)
def update_task(
    task_id: str,
    task_update: TaskUpdate,
    identity: Identity = Depends(get_current_identity),
    service: TaskService = Depends(get_task_service),
):
    try:
        # Only fields provided in the request
        patch = TaskPatch(**task_update.model_dump(exclude_unset=True))
        view = service.update_task(task_id, patch, identity)
        return TaskOut.from_view(view)
    except TaskTrackerError:
        raise
    except Exception:
        logger.exception("Error in update_task")
        raise HTTPException(status_code=500, detail="Could not update task")


@router.delete("/{task_id}", response_model=MessageOut)
def delete_task(
    task_id: str,
    identity: Identity = Depends(require_admin),
    service: TaskService = Depends(get_task_service),
):
    try:
        service.delete_task(task_id, identity)
        return {"message": "Task deleted successfully"}
    except TaskTrackerError:
        raise
    except Exception:
        logger.exception("Error in delete_task")
        raise HTTPException(status_code=500, detail="Could not delete task")
