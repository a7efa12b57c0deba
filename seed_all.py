"""
Database Seeding Script
Wipes existing users and tasks, then loads the demo data
"""

import logging

from demo_tasks import DEMO_TASKS
from demo_users import DEMO_USERS
from tasktracker.config import Settings, configure_logging
from tasktracker.database import build_engine, build_session_factory, init_db
from tasktracker.models.task import Task
from tasktracker.models.user import User
from tasktracker.services.auth_service import AuthService
from tasktracker.services.task_service import TaskPatch, TaskService
from tasktracker.stores.task_store import TaskStore
from tasktracker.stores.user_store import UserStore
from tasktracker.utils.security import Identity

logger = logging.getLogger("seed_all")


def seed(db, settings: Settings) -> dict:
    """Replace all data with the demo set; returns counts of what was created"""
    # Tasks first, they reference users
    db.query(Task).delete()
    db.query(User).delete()
    db.commit()

    users = UserStore(db)
    auth = AuthService(users, settings)
    for user in DEMO_USERS:
        auth.register(**user)
    logger.info("Created %d users", len(DEMO_USERS))

    admin = next(u for u in DEMO_USERS if u["role"].value == "admin")
    admin_user = users.get_by_email(admin["email"])
    identity = Identity(id=admin_user.id, email=admin_user.email, role=admin_user.role)

    service = TaskService(TaskStore(db), users, settings)
    for data in DEMO_TASKS:
        assignee = users.get_by_email(data["assignee"])
        view = service.create_task(
            title=data["title"],
            description=data["description"],
            assigned_to=assignee.id,
            due_date=data["due_date"],
        )
        service.update_task(view.task.id, TaskPatch(status=data["status"]), identity)
    logger.info("Created %d tasks", len(DEMO_TASKS))

    return {"users": len(DEMO_USERS), "tasks": len(DEMO_TASKS)}


def main():
    settings = Settings.from_env()
    configure_logging(settings.log_level)

    engine = build_engine(settings.database_url, settings.db_sslmode)
    init_db(engine)
    db = build_session_factory(engine)()
    try:
        seed(db, settings)
        logger.info("Database seeded successfully")
        for user in DEMO_USERS:
            logger.info("  %s / %s (%s)", user["email"], user["password"], user["role"].value)
    finally:
        db.close()
        engine.dispose()


if __name__ == "__main__":
    main()
