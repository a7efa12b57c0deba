"""Role-aware operations over the task store.

Admins see and manage every task. Employees only ever see the tasks
assigned to them and may edit those, but never create or delete.
"""

import logging
from dataclasses import dataclass, fields
from datetime import date
from typing import Dict, List, Optional, Union

from tasktracker.config.settings import Settings
from tasktracker.exceptions import (
    AccessDeniedError,
    AssignedUserNotFoundError,
    InvalidIdError,
    TaskNotFoundError,
)
from tasktracker.models.task import Task, TaskStatus
from tasktracker.models.user import User, UserRole
from tasktracker.stores.task_store import TaskStore
from tasktracker.stores.user_store import UserStore
from tasktracker.utils.pagination import page_offset, pagination_envelope
from tasktracker.utils.security import Identity

logger = logging.getLogger(__name__)

RawId = Union[int, str]

# Largest id the database can store (signed 64-bit)
MAX_ID = 2**63 - 1


@dataclass
class TaskFilters:
    status: Optional[TaskStatus] = None
    assigned_to: Optional[RawId] = None
    page: int = 1
    limit: int = 10


@dataclass
class TaskPatch:
    """Fields to change on a task; ``None`` means leave the field alone"""

    title: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[date] = None
    status: Optional[TaskStatus] = None

    def changes(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}


@dataclass
class TaskView:
    """A task joined with its assignee (``None`` if the user is gone)"""

    task: Task
    assignee: Optional[User]


def parse_id(raw: RawId, kind: str = "task") -> int:
    if isinstance(raw, bool):
        raise InvalidIdError(kind)
    if isinstance(raw, int):
        value = raw
    else:
        text = str(raw).strip()
        if not (text.isascii() and text.isdigit()):
            raise InvalidIdError(kind)
        value = int(text)
    if value < 1 or value > MAX_ID:
        raise InvalidIdError(kind)
    return value


class TaskService:
    def __init__(self, tasks: TaskStore, users: UserStore, settings: Settings):
        self.tasks = tasks
        self.users = users
        self.settings = settings

    def _join(self, tasks: List[Task]) -> List[TaskView]:
        """Resolve assignees for a batch of tasks with one user lookup"""
        by_id: Dict[int, User] = {u.id: u for u in self.users.get_many(t.assigned_to for t in tasks)}
        return [TaskView(task=t, assignee=by_id.get(t.assigned_to)) for t in tasks]

    def _view(self, task: Task) -> TaskView:
        return self._join([task])[0]

    def _load(self, raw_id: RawId) -> Task:
        task = self.tasks.get(parse_id(raw_id))
        if task is None:
            raise TaskNotFoundError()
        return task

    def create_task(self, title: str, description: str, assigned_to: int, due_date: date) -> TaskView:
        """Create a Pending task. The caller's admin role is checked at the API boundary."""
        if not self.users.exists(assigned_to):
            raise AssignedUserNotFoundError()

        task = self.tasks.add(
            title=title,
            description=description,
            assigned_to=assigned_to,
            due_date=due_date,
        )
        logger.info("Task %s created and assigned to user %s", task.id, assigned_to)
        return self._view(task)

    def list_tasks(self, filters: TaskFilters, identity: Identity) -> dict:
        page = filters.page
        limit = min(filters.limit, self.settings.max_page_limit)

        if identity.is_admin:
            assigned_to = (
                parse_id(filters.assigned_to, kind="user") if filters.assigned_to not in (None, "") else None
            )
        else:
            # Employees only ever see their own tasks, whatever filter they send
            assigned_to = identity.id

        total = self.tasks.count(status=filters.status, assigned_to=assigned_to)
        offset = page_offset(page, limit)
        # Past the last page: nothing to fetch
        if offset >= total:
            tasks = []
        else:
            tasks = self.tasks.query(
                status=filters.status,
                assigned_to=assigned_to,
                offset=offset,
                limit=limit,
            )

        return {
            "tasks": self._join(tasks),
            "pagination": pagination_envelope(page, limit, total),
        }

    def get_task(self, raw_id: RawId, identity: Identity) -> TaskView:
        task = self._load(raw_id)
        if not identity.is_admin and task.assigned_to != identity.id:
            raise AccessDeniedError()
        return self._view(task)

    def update_task(self, raw_id: RawId, patch: TaskPatch, identity: Identity) -> TaskView:
        task = self._load(raw_id)
        if not identity.is_admin and task.assigned_to != identity.id:
            raise AccessDeniedError()

        changes = patch.changes()
        if changes:
            task = self.tasks.apply_patch(task, changes)
            logger.info("Task %s updated by user %s: %s", task.id, identity.id, sorted(changes))
        return self._view(task)

    def delete_task(self, raw_id: RawId, identity: Identity) -> None:
        task = self._load(raw_id)
        if not identity.is_admin:
            raise AccessDeniedError()

        task_id = task.id
        self.tasks.delete(task)
        logger.info("Task %s deleted by user %s", task_id, identity.id)

    def list_employees(self) -> List[User]:
        return self.users.list_by_role(UserRole.EMPLOYEE)
