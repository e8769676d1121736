from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session
from app.auth.authenticator import Authenticator
from app.auth.token import TokenIssuer, get_token_issuer
from app.auth.utils import get_current_user
from app.core.config import settings
from app.core.exceptions import InvalidToken
from app.db.session import get_db
from app.model.user_schema import LoginResponse, UserDetailsResponse, UserLogin
from app.repository.user import get_user_by_name

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/login", response_model=LoginResponse)
def login(
    data: UserLogin,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
    issuer: TokenIssuer = Depends(get_token_issuer),
):
    # raises InvalidCredentials (401) before anything below touches the request
    authenticated = Authenticator(db).authenticate(data.username, data.password)

    request.state.user = {
        "username": authenticated.username,
        "roles": set(authenticated.roles),
    }
    token = issuer.generate_token(authenticated.username, authenticated.roles)

    response.set_cookie(
        settings.JWT_COOKIE_NAME,
        token,
        max_age=issuer.ttl_seconds,
        path="/",
        secure=True,
        httponly=True,
        samesite="strict",
    )

    return LoginResponse(
        username=authenticated.username,
        csrf_token=getattr(request.state, "csrf_token", None),
        message="Login successful",
    )


@router.get("/me", response_model=UserDetailsResponse)
def me(current_user: dict = Depends(get_current_user), db: Session = Depends(get_db)):
    user = get_user_by_name(db, username=current_user["username"])
    if not user:
        raise InvalidToken("User no longer exists")
    return UserDetailsResponse(
        id=user.id,
        username=user.username,
        email=user.email,
        roles=sorted(user.role_names),
    )


@router.post("/logout")
def logout(response: Response):
    response.delete_cookie(
        settings.JWT_COOKIE_NAME,
        path="/",
        secure=True,
        httponly=True,
        samesite="strict",
    )
    return {"message": "Logout successful"}
