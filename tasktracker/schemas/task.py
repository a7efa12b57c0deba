from datetime import date, datetime
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, model_validator
from pydantic.alias_generators import to_camel

from tasktracker.models.task import TaskStatus

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

# Row ids are signed 64-bit integers
RowId = Annotated[int, Field(gt=0, le=2**63 - 1)]

# Clients speak camelCase (assignedTo, dueDate); snake_case is accepted too
CAMEL_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class TaskCreate(BaseModel):
    title: NonEmptyStr
    description: NonEmptyStr
    assigned_to: RowId
    due_date: date

    model_config = CAMEL_CONFIG


class TaskUpdate(BaseModel):
    """Partial update: only the fields present in the request are changed"""

    title: Optional[NonEmptyStr] = None
    description: Optional[NonEmptyStr] = None
    due_date: Optional[date] = None
    status: Optional[TaskStatus] = None

    model_config = CAMEL_CONFIG

    @model_validator(mode="before")
    @classmethod
    def reject_explicit_nulls(cls, data):
        if isinstance(data, dict):
            nulls = sorted(key for key, value in data.items() if value is None)
            if nulls:
                raise ValueError(f"Fields cannot be null: {', '.join(nulls)}")
        return data


class AssigneeOut(BaseModel):
    id: int
    name: Optional[str] = None
    email: Optional[str] = None

    model_config = CAMEL_CONFIG


class TaskOut(BaseModel):
    id: int
    title: str
    description: str
    assigned_to: AssigneeOut
    due_date: date
    status: TaskStatus
    created_at: datetime
    updated_at: datetime

    model_config = CAMEL_CONFIG

    @classmethod
    def from_view(cls, view) -> "TaskOut":
        """Build the response from a task joined with its assignee"""
        task = view.task
        if view.assignee is not None:
            assignee = AssigneeOut.model_validate(view.assignee)
        else:
            assignee = AssigneeOut(id=task.assigned_to)
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            assigned_to=assignee,
            due_date=task.due_date,
            status=task.status,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )


class PaginationOut(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class TaskListOut(BaseModel):
    tasks: List[TaskOut]
    pagination: PaginationOut


class MessageOut(BaseModel):
    message: str
