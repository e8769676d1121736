from passlib.context import CryptContext
from fastapi import HTTPException, Request, status

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def dummy_verify():
    """Spend the same time as a real verify when there is no hash to check."""
    pwd_context.dummy_verify()


def get_current_user(request: Request) -> dict:
    # filled in by AuthMiddleware from the bearer header or the jwt cookie
    user = getattr(request.state, "user", None)
    if not user or not user.get("username"):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def require_role(role: str):
    def checker(request: Request) -> dict:
        user = get_current_user(request)
        if role not in user.get("roles", ()):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")
        return user

    return checker


require_admin = require_role("ADMIN")
