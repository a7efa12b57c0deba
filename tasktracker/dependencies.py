"""Request-scoped service construction for the routers."""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from tasktracker.config.settings import Settings
from tasktracker.database import get_db
from tasktracker.services.auth_service import AuthService
from tasktracker.services.task_service import TaskService
from tasktracker.stores.task_store import TaskStore
from tasktracker.stores.user_store import UserStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_auth_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    return AuthService(UserStore(db), settings)


def get_task_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> TaskService:
    return TaskService(TaskStore(db), UserStore(db), settings)
