import logging

from fastapi import APIRouter, Depends, HTTPException, status

from tasktracker.dependencies import get_auth_service
from tasktracker.exceptions import TaskTrackerError
from tasktracker.schemas.tokens import AuthResponse, CurrentUserResponse
from tasktracker.schemas.user import UserCreate, UserLogin
from tasktracker.services.auth_service import AuthService, public_user
from tasktracker.utils.auth import get_current_identity
from tasktracker.utils.security import Identity

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(user: UserCreate, auth: AuthService = Depends(get_auth_service)):
    try:
        return auth.register(name=user.name, email=user.email, password=user.password, role=user.role)
    except TaskTrackerError:
        raise
    except Exception:
        logger.exception("Registration failed")
        raise HTTPException(status_code=500, detail="Registration failed")


@router.post("/login", response_model=AuthResponse)
def login(user: UserLogin, auth: AuthService = Depends(get_auth_service)):
    try:
        return auth.login(user.email, user.password)
    except TaskTrackerError:
        raise
    except Exception:
        logger.exception("Login failed")
        raise HTTPException(status_code=500, detail="Login failed")


@router.get("/me", response_model=CurrentUserResponse)
def me(
    identity: Identity = Depends(get_current_identity),
    auth: AuthService = Depends(get_auth_service),
):
    """Profile of the user the token belongs to"""
    try:
        return {"user": public_user(auth.get_current_user(identity.id))}
    except TaskTrackerError:
        raise
    except Exception:
        logger.exception("Could not load current user")
        raise HTTPException(status_code=500, detail="Could not load user")
