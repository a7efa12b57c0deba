"""Demo tasks used by seed_all.py; ``assignee`` is the email of a demo user"""

from datetime import date

from tasktracker.models.task import TaskStatus

DEMO_TASKS = [
    {
        "title": "Complete project documentation",
        "description": "Write comprehensive documentation for the new feature",
        "assignee": "john@example.com",
        "due_date": date(2024, 2, 15),
        "status": TaskStatus.PENDING,
    },
    {
        "title": "Fix login bug",
        "description": "Investigate and fix the login issue reported by users",
        "assignee": "john@example.com",
        "due_date": date(2024, 2, 10),
        "status": TaskStatus.IN_PROGRESS,
    },
    {
        "title": "Design new UI mockups",
        "description": "Create mockups for the dashboard redesign",
        "assignee": "jane@example.com",
        "due_date": date(2024, 2, 20),
        "status": TaskStatus.PENDING,
    },
    {
        "title": "Code review for PR #123",
        "description": "Review the pull request for the authentication module",
        "assignee": "jane@example.com",
        "due_date": date(2024, 2, 12),
        "status": TaskStatus.COMPLETED,
    },
]
