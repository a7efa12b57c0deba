# create_tables.py
import logging

from tasktracker.config import Settings, configure_logging
from tasktracker.database import build_engine, build_session_factory, init_db
from tasktracker.exceptions import DuplicateUserError
from tasktracker.models.user import UserRole
from tasktracker.services.auth_service import AuthService
from tasktracker.stores.user_store import UserStore

logger = logging.getLogger("create_tables")

DEFAULT_ADMIN = {
    "name": "System Administrator",
    "email": "admin@example.com",
    "password": "admin123",
    "role": UserRole.ADMIN,
}


def create_tables(settings: Settings) -> None:
    """Create all tables and the default admin user"""
    engine = build_engine(settings.database_url, settings.db_sslmode)
    init_db(engine)
    logger.info("All tables created successfully")

    session_factory = build_session_factory(engine)
    db = session_factory()
    try:
        create_default_admin(AuthService(UserStore(db), settings))
    finally:
        db.close()
        engine.dispose()


def create_default_admin(auth: AuthService) -> None:
    try:
        auth.register(**DEFAULT_ADMIN)
    except DuplicateUserError:
        logger.info("Admin user already exists")
        return
    logger.info("Default admin user created (email: %s)", DEFAULT_ADMIN["email"])


if __name__ == "__main__":
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    create_tables(settings)
