import hmac
import secrets

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from app.core.config import settings

SAFE_METHODS = {"GET", "HEAD", "OPTIONS", "TRACE"}
EXEMPT_PATHS = {"/api/auth/login"}


class CSRFMiddleware(BaseHTTPMiddleware):
    """Double-submit cookie protection for cookie-authenticated requests.

    The token lives in a readable cookie; unsafe requests that carry the jwt
    cookie must echo it back in a header. Requests authenticated with a
    bearer header carry no ambient credential and are not checked.
    """

    def __init__(self, app, enabled: bool = None):
        super().__init__(app)
        self.enabled = settings.CSRF_ENABLED if enabled is None else enabled

    async def dispatch(self, request: Request, call_next):
        if not self.enabled:
            request.state.csrf_token = None
            return await call_next(request)

        cookie_token = request.cookies.get(settings.CSRF_COOKIE_NAME)
        request.state.csrf_token = cookie_token or secrets.token_urlsafe(32)

        if self._needs_check(request):
            header_token = request.headers.get(settings.CSRF_HEADER_NAME)
            if not cookie_token or not header_token or not hmac.compare_digest(cookie_token, header_token):
                return JSONResponse(
                    status_code=403,
                    content={"detail": "Invalid or missing CSRF token", "code": "CsrfRejected"},
                )

        response = await call_next(request)
        if not cookie_token:
            response.set_cookie(
                settings.CSRF_COOKIE_NAME,
                request.state.csrf_token,
                path="/",
                secure=True,
                httponly=False,
                samesite="strict",
            )
        return response

    def _needs_check(self, request: Request) -> bool:
        if request.method in SAFE_METHODS or request.url.path in EXEMPT_PATHS:
            return False
        auth = request.headers.get("Authorization", "")
        if auth.lower().startswith("bearer "):
            return False
        return settings.JWT_COOKIE_NAME in request.cookies
