# eventops/api/v1/endpoints/auth.py
import logging
import math

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from eventops.api import deps
from eventops.core.errors import AuthenticationError, ConflictError, LockedError
from eventops.core.limiter import LOGIN_RATE_LIMIT, REGISTER_RATE_LIMIT, limiter
from eventops.core.security import create_access_token, verify_password
from eventops.crud import crud_user
from eventops.db.session import get_db
from eventops.models.user import User
from eventops.schemas.user import AuthResponse, User as UserSchema, UserLogin, UserRegister, UserUpdate
from eventops.services import account_lockout

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])

INVALID_CREDENTIALS = "Invalid email or password"


def _locked_error(lockout_duration: int) -> LockedError:
    duration = account_lockout.format_lockout_duration(lockout_duration)
    return LockedError(
        f"Account temporarily locked. Try again in {duration}.",
        retry_after=math.ceil(lockout_duration / 1000),
    )


def _auth_response(user: User) -> dict:
    token = create_access_token(subject=user.id, role=user.role, email=user.email)
    return {"access_token": token, "token_type": "bearer", "user": user}


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(REGISTER_RATE_LIMIT)
def register(request: Request, user_in: UserRegister, db: Session = Depends(get_db)):
    """Create an account and return an access token for it."""
    if crud_user.user.get_by_email(db, email=user_in.email):
        raise ConflictError("An account with this email already exists")

    user = crud_user.user.create(db, obj_in=user_in)
    logger.info(f"Registered user {user.id} ({user.role})")
    return _auth_response(user)


@router.post("/login", response_model=AuthResponse)
@limiter.limit(LOGIN_RATE_LIMIT)
def login(request: Request, credentials: UserLogin, db: Session = Depends(get_db)):
    """
    Exchange email and password for an access token.

    Repeated failures lock the account for a growing period; while locked
    the endpoint answers 423 without checking the password.
    """
    identifier = credentials.email.lower()

    lockout = account_lockout.check_lockout_status(db, identifier)
    if lockout.is_locked:
        raise _locked_error(lockout.lockout_duration)

    user = crud_user.user.get_by_email(db, email=identifier)
    if not user or not verify_password(credentials.password, user.password_hash):
        lockout = account_lockout.record_failed_attempt(db, identifier)
        if lockout.is_locked:
            raise _locked_error(lockout.lockout_duration)
        raise AuthenticationError(
            INVALID_CREDENTIALS,
            details={"remaining_attempts": lockout.remaining_attempts},
        )

    if user.is_suspended:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account suspended")

    account_lockout.clear_failed_attempts(db, identifier)
    return _auth_response(user)


@router.get("/me", response_model=UserSchema)
def read_me(current_user: User = Depends(deps.get_current_db_user)):
    return current_user


@router.patch("/me", response_model=UserSchema)
def update_me(
    user_in: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_db_user),
):
    return crud_user.user.update(db, db_obj=current_user, obj_in=user_in)
