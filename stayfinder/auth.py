import logging
from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import APIKeyHeader
from jose import jwt, JWTError
from sqlalchemy.orm import Session

from . import models
from .config import settings
from .database import get_db

logger = logging.getLogger("stayfinder.auth")

# auto_error=False: a missing header means "no current user", not a 403
api_key_header = APIKeyHeader(name="Authorization", auto_error=False)


def resolve_user(db: Session, token: Optional[str]) -> Optional[models.User]:
    """
    Decodes the 'Authorization: Bearer ...' value and loads the user named
    by its 'sub' claim. Returns None for a missing, malformed or invalid
    token and for an unknown user.
    """
    if not token:
        return None
    try:
        scheme, jwt_token = token.split()
        if scheme.lower() != "bearer":
            return None
        payload = jwt.decode(jwt_token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        user_id = payload.get("sub")
    except (JWTError, ValueError, AttributeError) as e:
        logger.debug(f"Rejected bearer token: {e}")
        return None

    if not user_id:
        return None
    return db.get(models.User, str(user_id))


def get_current_user(
        token: Annotated[Optional[str], Depends(api_key_header)],
        db: Session = Depends(get_db),
) -> Optional[models.User]:
    return resolve_user(db, token)
