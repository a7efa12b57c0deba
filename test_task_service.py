from datetime import date

import pytest

from tasktracker.exceptions import (
    AccessDeniedError,
    AssignedUserNotFoundError,
    DuplicateUserError,
    InvalidIdError,
    TaskNotFoundError,
    UserInUseError,
    UserNotFoundError,
)
from tasktracker.models.task import TaskStatus
from tasktracker.models.user import UserRole
from tasktracker.services.task_service import MAX_ID, TaskFilters, TaskPatch, TaskService, parse_id
from tasktracker.stores.task_store import TaskStore
from tasktracker.stores.user_store import UserStore
from tasktracker.utils.security import Identity


@pytest.fixture()
def users(db):
    return UserStore(db)


@pytest.fixture()
def service(db, users, settings):
    return TaskService(TaskStore(db), users, settings)


def _identity(user):
    return Identity(id=user.id, email=user.email, role=user.role)


@pytest.fixture()
def people(users):
    admin = users.add("Admin", "admin@example.com", "x", UserRole.ADMIN)
    john = users.add("John", "john@example.com", "x", UserRole.EMPLOYEE)
    jane = users.add("Jane", "jane@example.com", "x", UserRole.EMPLOYEE)
    return {"admin": _identity(admin), "john": _identity(john), "jane": _identity(jane)}


def test_parse_id():
    assert parse_id("12") == 12
    assert parse_id(" 3 ") == 3
    assert parse_id(5) == 5
    assert parse_id(MAX_ID) == MAX_ID
    for bad in ("abc", "", "-1", "0", "1.5", True, "²", "٣", MAX_ID + 1, str(10**20)):
        with pytest.raises(InvalidIdError):
            parse_id(bad)


def test_patch_only_reports_present_fields():
    assert TaskPatch().changes() == {}
    assert TaskPatch(status=TaskStatus.COMPLETED).changes() == {"status": TaskStatus.COMPLETED}


def test_store_rejects_duplicate_email(users):
    users.add("A", "dup@example.com", "x", UserRole.EMPLOYEE)
    with pytest.raises(DuplicateUserError):
        users.add("B", "dup@example.com", "x", UserRole.ADMIN)


def test_create_requires_existing_assignee(service):
    with pytest.raises(AssignedUserNotFoundError):
        service.create_task("t", "d", 99, date(2024, 2, 10))


def test_create_defaults_to_pending_and_joins_assignee(service, people):
    view = service.create_task("t", "d", people["john"].id, date(2024, 2, 10))
    assert view.task.status == TaskStatus.PENDING
    assert view.assignee.name == "John"


def test_employee_listing_ignores_assignee_filter(service, people):
    service.create_task("john's", "d", people["john"].id, date(2024, 2, 10))
    service.create_task("jane's", "d", people["jane"].id, date(2024, 2, 10))

    result = service.list_tasks(TaskFilters(assigned_to=people["jane"].id), people["john"])
    assert [v.task.title for v in result["tasks"]] == ["john's"]

    result = service.list_tasks(TaskFilters(assigned_to=str(people["jane"].id)), people["admin"])
    assert [v.task.title for v in result["tasks"]] == ["jane's"]


def test_limit_is_clamped(service, people, settings):
    result = service.list_tasks(TaskFilters(limit=settings.max_page_limit + 1), people["admin"])
    assert result["pagination"]["limit"] == settings.max_page_limit


def test_page_past_the_end_skips_the_row_query(service, people, monkeypatch):
    service.create_task("t", "d", people["john"].id, date(2024, 2, 10))

    def no_query(**kwargs):
        raise AssertionError("rows fetched past the last page")

    monkeypatch.setattr(service.tasks, "query", no_query)
    result = service.list_tasks(TaskFilters(page=10**18, limit=50), people["admin"])
    assert result["tasks"] == []
    assert result["pagination"] == {"page": 10**18, "limit": 50, "total": 1, "pages": 1}


def test_update_rules(service, people):
    view = service.create_task("t", "d", people["john"].id, date(2024, 2, 10))

    with pytest.raises(AccessDeniedError):
        service.update_task(view.task.id, TaskPatch(status=TaskStatus.COMPLETED), people["jane"])
    assert service.get_task(view.task.id, people["admin"]).task.status == TaskStatus.PENDING

    updated = service.update_task(str(view.task.id), TaskPatch(due_date=date(2024, 3, 1)), people["john"])
    assert updated.task.due_date == date(2024, 3, 1)
    assert updated.task.title == "t"

    with pytest.raises(TaskNotFoundError):
        service.update_task(12345, TaskPatch(title="x"), people["admin"])


def test_delete_rules(service, people):
    view = service.create_task("t", "d", people["john"].id, date(2024, 2, 10))

    with pytest.raises(AccessDeniedError):
        service.delete_task(view.task.id, people["john"])

    service.delete_task(view.task.id, people["admin"])
    with pytest.raises(TaskNotFoundError):
        service.get_task(view.task.id, people["admin"])


def test_list_employees(service, people):
    assert [u.email for u in service.list_employees()] == ["john@example.com", "jane@example.com"]


def test_assigned_user_cannot_be_deleted(service, users, people):
    service.create_task("t", "d", people["john"].id, date(2024, 2, 10))

    with pytest.raises(UserInUseError):
        users.delete(people["john"].id)
    assert users.exists(people["john"].id)

    users.delete(people["jane"].id)
    assert not users.exists(people["jane"].id)

    with pytest.raises(UserNotFoundError):
        users.delete(people["jane"].id)
