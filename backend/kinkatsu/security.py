"""Password hashing and the bearer tokens that say which lifter is signed in."""
from datetime import datetime, timedelta, timezone
from typing import Optional
from passlib.context import CryptContext
from jose import jwt
from jose.exceptions import JWTClaimsError, JWTError
from kinkatsu.settings import get_settings

pwd_ctx = CryptContext(schemes=["bcrypt"], deprecated="auto")

TOKEN_TYPE = "access"

def hash_password(p: str) -> str:
    return pwd_ctx.hash(p)

def verify_password(plain: str, hashed: str) -> bool:
    # accounts created without a password (fixtures, imports) can never log in
    if not hashed:
        return False
    return pwd_ctx.verify(plain, hashed)

def token_lifetime(expires_minutes: Optional[int] = None) -> timedelta:
    return timedelta(minutes=expires_minutes if expires_minutes is not None else get_settings().ACCESS_TOKEN_EXPIRE_MINUTES)

def create_access_token(user_id: str, *, expires_minutes: Optional[int] = None) -> str:
    s = get_settings()
    now = datetime.now(timezone.utc)
    claims = {
        "sub": user_id,
        "typ": TOKEN_TYPE,
        "iat": int(now.timestamp()),
        "exp": int((now + token_lifetime(expires_minutes)).timestamp()),
    }
    return jwt.encode(claims, s.SECRET_KEY, algorithm=s.ALGORITHM)

def token_subject(token: str) -> str:
    """
    The user id an access token was issued for.
    Raises ExpiredSignatureError for an expired token and JWTError for anything else.
    """
    s = get_settings()
    claims = jwt.decode(token, s.SECRET_KEY, algorithms=[s.ALGORITHM], options={"require_exp": True})
    if claims.get("typ") != TOKEN_TYPE:
        raise JWTClaimsError("not an access token")
    sub = claims.get("sub")
    if not isinstance(sub, str) or not sub:
        raise JWTClaimsError("missing subject")
    return sub
