from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from typing import Optional
from app.auth.token import get_token_issuer
from app.core.config import settings
from app.core.exceptions import InvalidToken


def extract_token(request: Request) -> Optional[str]:
    auth: Optional[str] = request.headers.get("Authorization")
    if auth and auth.lower().startswith("bearer "):
        return auth.split(" ", 1)[1].strip()
    return request.cookies.get(settings.JWT_COOKIE_NAME) or None


class AuthMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request.state.user = None  # default

        token = extract_token(request)
        if token:
            try:
                claims = get_token_issuer().decode(token)
                request.state.user = {
                    "username": claims.username,
                    "roles": set(claims.roles),
                    "expires_at": claims.expires_at,
                }
            except InvalidToken:
                request.state.user = None

        response = await call_next(request)
        return response
