# eventops/api/deps.py
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy.orm import Session

from eventops.core.security import decode_access_token
from eventops.crud import crud_user
from eventops.db.session import get_db
from eventops.models.user import User
from eventops.schemas.token import TokenPayload

ADMIN_ROLES = ("admin", "superadmin")

# This tells FastAPI where to look for the token (used by the OpenAPI docs).
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")
# Optional version that doesn't raise an error when token is missing
oauth2_scheme_optional = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)


def _decode(token: str) -> TokenPayload:
    payload = decode_access_token(token)
    return TokenPayload(**payload)


def get_current_user(
    token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)
) -> TokenPayload:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        token_data = _decode(token)
    except (JWTError, ValueError):
        # Catches any error from jose or Pydantic validation
        raise credentials_exception

    user = crud_user.user.get(db, id=token_data.sub)
    if user is None:
        raise credentials_exception
    if user.is_suspended:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account suspended")

    # Role changes made by an admin apply without waiting for a new token
    token_data.role = user.role
    return token_data


def get_current_user_optional(
    token: str | None = Depends(oauth2_scheme_optional),
) -> TokenPayload | None:
    if token is None:
        return None
    try:
        return _decode(token)
    except (JWTError, ValueError):
        # Public endpoints treat an invalid token as anonymous
        return None


def get_current_db_user(
    current_user: TokenPayload = Depends(get_current_user), db: Session = Depends(get_db)
) -> User:
    user = crud_user.user.get(db, id=current_user.sub)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


def require_admin(current_user: TokenPayload = Depends(get_current_user)) -> TokenPayload:
    if current_user.role not in ADMIN_ROLES:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return current_user


def require_superadmin(current_user: TokenPayload = Depends(get_current_user)) -> TokenPayload:
    if current_user.role != "superadmin":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Superadmin access required")
    return current_user
