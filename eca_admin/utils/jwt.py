from datetime import datetime, timedelta, timezone
from jose import jwt
from eca_admin.core.config import Settings, settings
import logging

logger = logging.getLogger(__name__)


def create_access_token(
    subject: str | int,
    expires_delta: timedelta | None = None,
    config: Settings = settings,
) -> str:
    if expires_delta is None:
        expires_delta = timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES)

    now = datetime.now(timezone.utc)
    to_encode = {
        "sub": str(subject),
        "exp": now + expires_delta,
        "iat": now,
    }
    token = jwt.encode(to_encode, config.SECRET_KEY, algorithm=config.ALGORITHM)

    logger.debug(f"✅ JWT created: sub={subject}, exp={to_encode['exp']}")
    return token


def decode_access_token(token: str, config: Settings = settings) -> dict:
    return jwt.decode(token, config.SECRET_KEY, algorithms=[config.ALGORITHM])
