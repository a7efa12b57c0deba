# tasktracker/utils/auth.py
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from tasktracker.dependencies import get_auth_service
from tasktracker.exceptions import InvalidTokenError
from tasktracker.services.auth_service import AuthService
from tasktracker.utils.security import Identity

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")


def get_current_identity(
    token: str = Depends(oauth2_scheme),
    auth: AuthService = Depends(get_auth_service),
) -> Identity:
    try:
        return auth.authenticate(token)
    except InvalidTokenError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=exc.message,
            headers={"WWW-Authenticate": "Bearer"},
        )


def require_admin(identity: Identity = Depends(get_current_identity)) -> Identity:
    if not identity.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return identity
