# kinkatsu/deps/auth.py
import logging
from functools import partial
from typing import Callable, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from jose.exceptions import ExpiredSignatureError, JWTError

from kinkatsu.db import get_db
from kinkatsu.models import User
from kinkatsu.repositories.user_repo import UserRepository
from kinkatsu.security import token_subject

log = logging.getLogger(__name__)

# Exposes Bearer auth in Swagger; login endpoint issues the token
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")
# Same scheme without the automatic 401; actions report missing auth themselves
optional_oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)

def get_current_user(
    db: Session = Depends(get_db),
    token: str = Depends(oauth2_scheme),
) -> User:
    unauth = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        user_id = token_subject(token)
    except ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token expired",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except JWTError:
        raise unauth

    # a valid token for a deleted account is as good as no token
    user = UserRepository(db).get(user_id)
    if not user:
        raise unauth
    return user

def resolve_user_id(db: Session, token: Optional[str]) -> Optional[str]:
    """The signed-in user's id, or None for a missing, invalid or expired token."""
    if not token:
        return None
    try:
        user_id = token_subject(token)
    except JWTError as e:
        log.info("rejected bearer token: %s", e.__class__.__name__)
        return None
    user = UserRepository(db).get(user_id)
    return user.id if user else None

def current_user_id_provider(
    db: Session = Depends(get_db),
    token: Optional[str] = Depends(optional_oauth2_scheme),
) -> Callable[[], Optional[str]]:
    """Dependency handing actions a lazy ``current_user_id()`` capability."""
    return partial(resolve_user_id, db, token)
