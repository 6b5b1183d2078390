from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from kinkatsu.db import get_db
from kinkatsu.models import User
from kinkatsu.schemas.user import UserRegister, UserLogin, UserRead, TokenRead
from kinkatsu.security import hash_password, verify_password, create_access_token, token_lifetime
from kinkatsu.deps.auth import get_current_user
from kinkatsu.repositories.user_repo import UserRepository

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register(payload: UserRegister, db: Session = Depends(get_db)):
    # emails compare case-insensitively, so store one spelling
    try:
        return UserRepository(db).create(
            email=payload.email.lower(),
            name=payload.name,
            password_hash=hash_password(payload.password),
        )
    except ValueError as e:
        if str(e) == "email_already_exists":
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="email already registered")
        raise

@router.post("/login", response_model=TokenRead)
def login(payload: UserLogin, db: Session = Depends(get_db)):
    user = UserRepository(db).get_by_email(payload.email)
    if not user or not verify_password(payload.password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="invalid credentials")
    return TokenRead(
        access_token=create_access_token(user.id),
        expires_in=int(token_lifetime().total_seconds()),
    )

@router.get("/me", response_model=UserRead)
def me(current_user: User = Depends(get_current_user)):
    return current_user
