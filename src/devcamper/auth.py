"""Bearer-token authentication.

Tokens have the form ``<user id>.<hex HMAC-SHA256 of the user id>`` keyed by
``AUTH_SECRET``. Routes that change data depend on ``protect`` (devcamper.dependencies),
which checks the signature, loads the user and hands it to the route:

    @router.post("")
    async def create(db: DB, user: CurrentUser) -> ...:
        ...
"""

import hashlib
import hmac

from sqlalchemy.ext.asyncio import AsyncSession

from devcamper.config import settings
from devcamper.db.ids import is_valid_id
from devcamper.exceptions import UnauthorizedError
from devcamper.logging import get_logger
from devcamper.models import User
from devcamper.repositories.resource import get_by_id

logger = get_logger(__name__)


def _sign(user_id: str, secret: str) -> str:
    return hmac.new(secret.encode(), user_id.encode(), hashlib.sha256).hexdigest()


def issue_token(user_id: str, secret: str | None = None) -> str:
    return f"{user_id}.{_sign(user_id, secret or settings.auth_secret)}"


def verify_token(token: str, secret: str | None = None) -> str | None:
    """Return the user id a token was issued for, or None if it is not genuine."""
    user_id, _, signature = token.partition(".")
    if not is_valid_id(user_id) or not signature:
        return None
    expected = _sign(user_id, secret or settings.auth_secret)
    if not hmac.compare_digest(expected, signature):
        return None
    return user_id


async def authenticate(db: AsyncSession, authorization: str | None) -> User:
    if not authorization:
        raise UnauthorizedError()
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise UnauthorizedError()

    user_id = verify_token(token.strip())
    if user_id is None:
        logger.warning("invalid_token")
        raise UnauthorizedError()

    user = await get_by_id(db, User, user_id)
    if user is None:
        logger.warning("token_for_unknown_user", user_id=user_id)
        raise UnauthorizedError()
    return user

