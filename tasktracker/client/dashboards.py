# tasktracker/client/dashboards.py
# Screen state for the login form and the two role dashboards.
# Every mutation is followed by a refetch; no client-side caching.

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Dict, List, Optional

from tasktracker.client import formatting
from tasktracker.client.api import ApiError, TaskTrackerClient

logger = logging.getLogger(__name__)


@dataclass
class TaskFilterState:
    status: str = ""
    assigned_to: Any = ""
    page: int = 1
    limit: int = 10


@dataclass
class TaskForm:
    title: str = ""
    description: str = ""
    assigned_to: Any = ""
    due_date: str = ""


@dataclass
class EmployeeForm:
    name: str = ""
    email: str = ""
    password: str = ""
    role: str = "employee"


@dataclass
class LoginForm:
    name: str = ""
    email: str = ""
    password: str = ""
    role: str = "employee"


class LoginScreen:
    """Login / register toggle; on success tells the caller where to go"""

    def __init__(self, client: TaskTrackerClient):
        self.client = client
        self.is_login = True
        self.form = LoginForm()
        self.error = ""
        self.loading = False

    def toggle_mode(self) -> None:
        self.is_login = not self.is_login
        self.error = ""

    def submit(self) -> Optional[str]:
        """Returns "admin" or "employee" for the dashboard to open, or None on failure"""
        self.error = ""
        self.loading = True
        try:
            if self.is_login:
                user = self.client.login(self.form.email, self.form.password)
            else:
                user = self.client.register(**asdict(self.form))
            return "admin" if user.get("role") == "admin" else "employee"
        except ApiError as e:
            self.error = e.message
        except Exception:
            logger.exception("Unexpected error while signing in")
            self.error = "An unexpected error occurred"
        finally:
            self.loading = False
        return None


class _TaskListScreen:
    failed_update_message = "Failed to update task"

    def __init__(self, client: TaskTrackerClient):
        self.client = client
        self.filters = TaskFilterState()
        self.tasks: List[dict] = []
        self.pagination: Dict[str, Any] = {}
        self.error = ""
        self.loading = False

    def _show_tasks(self, result: dict) -> None:
        self.tasks = result["tasks"]
        self.pagination = result["pagination"]

    def fetch_tasks(self) -> None:
        self.error = ""
        self.loading = True
        try:
            self._show_tasks(self.client.list_tasks(**asdict(self.filters)))
        except ApiError:
            self.error = "Failed to fetch tasks"
        finally:
            self.loading = False

    def set_filter(self, key: str, value: Any) -> None:
        """Changing a filter always returns to the first page"""
        setattr(self.filters, key, value)
        self.filters.page = 1
        self.fetch_tasks()

    def change_page(self, page: int) -> None:
        self.filters.page = page
        self.fetch_tasks()

    def next_page(self) -> None:
        if formatting.has_next(self.pagination):
            self.change_page(self.pagination["page"] + 1)

    def previous_page(self) -> None:
        if formatting.has_previous(self.pagination):
            self.change_page(self.pagination["page"] - 1)

    def update_task_status(self, task_id: Any, status: str) -> bool:
        self.error = ""
        try:
            self.client.update_task(task_id, status=status)
        except ApiError:
            self.error = self.failed_update_message
            return False
        self.fetch_tasks()
        return True

    def render_pager(self) -> List[str]:
        if not formatting.show_pager(self.pagination):
            return []
        prev_label = "[Previous]" if formatting.has_previous(self.pagination) else " Previous "
        next_label = "[Next]" if formatting.has_next(self.pagination) else " Next "
        return [f"{prev_label} {formatting.pager_label(self.pagination)} {next_label}"]


class EmployeeDashboard(_TaskListScreen):
    """The signed-in employee's own tasks"""

    failed_update_message = "Failed to update task status"

    def open(self) -> None:
        self.fetch_tasks()

    def stats(self) -> Dict[str, int]:
        counts = {status: 0 for status in formatting.STATUSES}
        for task in self.tasks:
            if task["status"] in counts:
                counts[task["status"]] += 1
        return {"Total Tasks": self.pagination.get("total", 0), **counts}

    def render(self, today=None) -> str:
        user = self.client.user or {}
        lines = ["My Tasks", f"Welcome, {user.get('name', '')}", ""]
        lines.append("  ".join(f"{label}: {count}" for label, count in self.stats().items()))
        if self.error:
            lines.append(f"! {self.error}")
        lines.append("")

        if self.loading:
            lines.append("Loading your tasks...")
        elif not self.tasks:
            lines.append("No tasks found. You're all caught up!")
        else:
            for task in self.tasks:
                lines.extend(
                    [
                        f"#{task['id']} {task['title']} [{task['status']}]",
                        f"    {task['description']}",
                        f"    Due: {formatting.format_date(task['dueDate'])}"
                        f" ({formatting.due_date_color(task['dueDate'], today)})"
                        f"  Created: {formatting.format_date(task['createdAt'])}",
                    ]
                )
        lines.extend(self.render_pager())
        return "\n".join(lines)


class AdminDashboard(_TaskListScreen):
    """Task management and employee management tabs"""

    TABS = ("tasks", "employees")

    def __init__(self, client: TaskTrackerClient):
        super().__init__(client)
        self.active_tab = "tasks"
        self.employees: List[dict] = []
        self.task_form = TaskForm()
        self.employee_form = EmployeeForm()

    def open(self) -> None:
        """Load tasks and the employee list side by side.

        Workers only fetch; screen state is set here on the calling thread.
        """
        self.error = ""
        self.loading = True
        employees_client = self.client.fork()
        errors = []
        try:
            with ThreadPoolExecutor(max_workers=2) as pool:
                tasks_future = pool.submit(self.client.list_tasks, **asdict(self.filters))
                employees_future = pool.submit(employees_client.list_employees)
                try:
                    self._show_tasks(tasks_future.result())
                except ApiError:
                    errors.append("Failed to fetch tasks")
                try:
                    self.employees = employees_future.result()
                except ApiError as e:
                    logger.error("Failed to fetch employees: %s", e.message)
                    errors.append("Failed to fetch employees")
        finally:
            employees_client.close()
            self.loading = False
        if errors:
            self.error = errors[0]

    def switch_tab(self, tab: str) -> None:
        if tab not in self.TABS:
            raise ValueError(f"Unknown tab: {tab}")
        self.active_tab = tab
        if tab == "tasks":
            self.fetch_tasks()
        else:
            self.fetch_employees()

    def fetch_employees(self) -> None:
        self.error = ""
        try:
            self.employees = self.client.list_employees()
        except ApiError as e:
            logger.error("Failed to fetch employees: %s", e.message)
            self.error = "Failed to fetch employees"

    def submit_task(self) -> bool:
        self.error = ""
        self.loading = True
        try:
            self.client.create_task(**asdict(self.task_form))
        except ApiError:
            self.error = "Failed to create task"
            return False
        finally:
            self.loading = False
        self.task_form = TaskForm()
        self.fetch_tasks()
        return True

    def submit_employee(self) -> bool:
        self.error = ""
        self.loading = True
        try:
            self.client.register(sign_in=False, **asdict(self.employee_form))
        except ApiError:
            self.error = "Failed to create employee"
            return False
        finally:
            self.loading = False
        self.employee_form = EmployeeForm()
        self.fetch_employees()
        return True

    def delete_task(self, task_id: Any, confirm: Callable[[str], bool] = lambda message: True) -> bool:
        if not confirm("Are you sure you want to delete this task?"):
            return False
        self.error = ""
        try:
            self.client.delete_task(task_id)
        except ApiError:
            self.error = "Failed to delete task"
            return False
        self.fetch_tasks()
        return True

    def employee_name(self, employee_id: Any) -> str:
        for employee in self.employees:
            if str(employee["id"]) == str(employee_id):
                return employee["name"]
        return ""

    def render(self) -> str:
        user = self.client.user or {}
        lines = ["Admin Dashboard", f"Welcome, {user.get('name', '')}", ""]
        if self.error:
            lines.append(f"! {self.error}")

        if self.active_tab == "employees":
            lines.append("Employee Management")
            for employee in self.employees:
                lines.append(f"  {employee['name']} <{employee['email']}> [{employee['role']}]")
            return "\n".join(lines)

        lines.append("Task Management")
        status_filter = self.filters.status or "All Status"
        assignee_filter = self.employee_name(self.filters.assigned_to) or "All Employees"
        lines.append(f"Filters: {status_filter} / {assignee_filter}")
        if self.loading:
            lines.append("Loading tasks...")
        for task in self.tasks:
            assignee = task.get("assignedTo") or {}
            lines.extend(
                [
                    f"#{task['id']} {task['title']} <{formatting.status_badge_class(task['status'])}>",
                    f"    {task['description']}",
                    f"    Assigned to: {assignee.get('name') or ''}"
                    f"  Due: {formatting.format_date(task['dueDate'])}"
                    f"  Status: {task['status']}",
                ]
            )
        lines.extend(self.render_pager())
        return "\n".join(lines)
