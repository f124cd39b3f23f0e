from typing import Annotated
from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from slowapi import Limiter
from slowapi.util import get_remote_address
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from eca_admin.core.config import Settings, settings
from eca_admin.database.auth import ACCESS_TOKEN_COOKIE, get_current_staff
from eca_admin.database.db_depends import get_db
from eca_admin.models import User
from eca_admin.schemas.user import PasswordChange, Token, UserLogin, UserOut
from eca_admin.services.user_service import authenticate_user, change_password
from eca_admin.utils.jwt import create_access_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth (API)"])
limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)
_login_rate_limit = settings.LOGIN_RATE_LIMIT

DBType = Annotated[AsyncSession, Depends(get_db)]
CurrentUser = Annotated[User, Depends(get_current_staff)]


def configure_limiter(config: Settings) -> Limiter:
    """Apply the rate limit settings of the app being built"""
    global _login_rate_limit
    limiter.enabled = config.RATE_LIMIT_ENABLED
    _login_rate_limit = config.LOGIN_RATE_LIMIT
    return limiter


@router.post("/login", response_model=Token, summary="Log in with email and password")
@limiter.limit(lambda: _login_rate_limit)
async def login(request: Request, response: Response, db: DBType, data: UserLogin):
    """
    Exchange credentials for an access token.

    The token is returned in the body and also set as an http-only
    ``access_token`` cookie. Only staff accounts can log in.
    """
    user = await authenticate_user(db, data.email, data.password)
    if not user or not user.role.is_staff:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    config = request.app.state.settings
    token = create_access_token(user.id, config=config)
    response.set_cookie(
        key=ACCESS_TOKEN_COOKIE,
        value=token,
        httponly=True,
        samesite="lax",
        max_age=config.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
    return Token(access_token=token, password_needs_change=user.password_needs_change)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(response: Response):
    response.delete_cookie(ACCESS_TOKEN_COOKIE)
    return None


@router.get("/me", response_model=UserOut, summary="Get the current user")
async def get_my_profile(current_user: CurrentUser):
    return current_user


@router.post("/change-password", response_model=UserOut)
async def update_my_password(db: DBType, current_user: CurrentUser, data: PasswordChange):
    """Replace the password; clears the change-required flag"""
    return await change_password(
        db, current_user, data.current_password, data.new_password
    )
