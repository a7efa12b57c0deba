# tasktracker/stores/task_store.py
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Query, Session

from tasktracker.models.task import Task, TaskStatus


class TaskStore:
    """Persistence for task records. Does not resolve assignees."""

    def __init__(self, db: Session):
        self.db = db

    def add(self, title: str, description: str, assigned_to: int, due_date: date) -> Task:
        task = Task(
            title=title,
            description=description,
            assigned_to=assigned_to,
            due_date=due_date,
            status=TaskStatus.PENDING,
        )
        self.db.add(task)
        self.db.commit()
        self.db.refresh(task)
        return task

    def get(self, task_id: int) -> Optional[Task]:
        return self.db.get(Task, task_id)

    def _filtered(self, status: Optional[TaskStatus], assigned_to: Optional[int]) -> Query:
        query = self.db.query(Task)
        if status is not None:
            query = query.filter(Task.status == status)
        if assigned_to is not None:
            query = query.filter(Task.assigned_to == assigned_to)
        return query

    def query(
        self,
        status: Optional[TaskStatus] = None,
        assigned_to: Optional[int] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> List[Task]:
        """Matching tasks, most recently created first"""
        return (
            self._filtered(status, assigned_to)
            .order_by(Task.created_at.desc(), Task.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )

    def count(self, status: Optional[TaskStatus] = None, assigned_to: Optional[int] = None) -> int:
        return self._filtered(status, assigned_to).count()

    def apply_patch(self, task: Task, changes: dict) -> Task:
        for key, value in changes.items():
            setattr(task, key, value)
        self.db.commit()
        self.db.refresh(task)
        return task

    def delete(self, task: Task) -> None:
        self.db.delete(task)
        self.db.commit()
