from fastapi import Depends, Request, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, ExpiredSignatureError
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from eca_admin.database.db_depends import get_db
from eca_admin.models import User
from eca_admin.utils.jwt import decode_access_token

logger = logging.getLogger(__name__)
security = HTTPBearer(auto_error=False)

ACCESS_TOKEN_COOKIE = "access_token"


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_token_from_request(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> str | None:
    """
    Extract the JWT from the request.

    Looked up in this order:
    1. Authorization header: "Bearer <token>"
    2. Cookie: "access_token"
    """
    if credentials:
        return credentials.credentials

    cookie_token = request.cookies.get(ACCESS_TOKEN_COOKIE)
    if cookie_token:
        logger.debug("✅ Token from cookie")
        return cookie_token

    logger.debug("⚠️ No token found in request")
    return None


async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_db),
    token: str | None = Depends(get_token_from_request),
) -> User:
    """
    Resolve the authenticated user.

    The token is decoded with the settings of the running application and
    the user is loaded from the database. Disabled accounts are rejected.
    """
    if not token:
        logger.warning("❌ Authentication failed: no token")
        raise _unauthorized("Not authenticated")
    try:
        data = decode_access_token(token, request.app.state.settings)
        user_id = data.get("sub")
        if not user_id:
            raise ValueError("Missing 'sub' in token")
        user_id = int(user_id)
    except ExpiredSignatureError:
        logger.warning("❌ Token expired")
        raise _unauthorized("Token has expired")
    except JWTError as e:
        logger.warning(f"❌ JWT error: {e}")
        raise _unauthorized("Could not validate credentials")
    except (ValueError, TypeError) as e:
        logger.warning(f"❌ Token format error: {e}")
        raise _unauthorized("Invalid token format")

    user = await db.get(User, user_id)
    if not user:
        logger.warning(f"❌ User {user_id} not found in database")
        raise _unauthorized("User not found")
    if not user.is_active:
        logger.warning(f"❌ User {user_id} is disabled")
        raise _unauthorized("Account disabled")
    return user


async def get_current_staff(user: User = Depends(get_current_user)) -> User:
    """Authenticated admin or super admin"""
    if not user.role.is_staff:
        logger.warning(f"⛔ User {user.id} is not staff")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions"
        )
    return user
