# tasktracker/stores/user_store.py
import logging
from typing import Iterable, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tasktracker.exceptions import DuplicateUserError, UserInUseError, UserNotFoundError
from tasktracker.models.task import Task
from tasktracker.models.user import User, UserRole

logger = logging.getLogger(__name__)


class UserStore:
    """Persistence for user records. Email uniqueness is enforced by the table."""

    def __init__(self, db: Session):
        self.db = db

    def add(self, name: str, email: str, hashed_password: str, role: UserRole) -> User:
        user = User(name=name, email=email, hashed_password=hashed_password, role=role)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise DuplicateUserError()
        self.db.refresh(user)
        return user

    def get(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def get_many(self, user_ids: Iterable[int]) -> List[User]:
        ids = set(user_ids)
        if not ids:
            return []
        return self.db.query(User).filter(User.id.in_(ids)).all()

    def exists(self, user_id: int) -> bool:
        return self.db.query(User.id).filter(User.id == user_id).first() is not None

    def list_by_role(self, role: UserRole) -> List[User]:
        return self.db.query(User).filter(User.role == role).order_by(User.id).all()

    def delete(self, user_id: int) -> None:
        """Remove a user that no task refers to.

        Tasks never lose their assignee: a user with assigned tasks is kept
        and ``UserInUseError`` is raised instead.
        """
        user = self.get(user_id)
        if user is None:
            raise UserNotFoundError()

        assigned = self.db.query(Task.id).filter(Task.assigned_to == user_id).count()
        if assigned:
            raise UserInUseError(f"User is still assigned to {assigned} task(s)")

        self.db.delete(user)
        self.db.commit()
        logger.info("Deleted user %s", user_id)
