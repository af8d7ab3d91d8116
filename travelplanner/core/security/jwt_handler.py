"""
JWT token management utilities.

Verifies bearer tokens issued by the identity service. Token creation is
kept for tooling and tests; the travel planner itself never logs users in.
"""

import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Union
from uuid import UUID

import jwt

from travelplanner.config import settings
from travelplanner.core.exceptions import InvalidTokenError, TokenExpiredError
from travelplanner.core.logging import get_logger

logger = get_logger(__name__)

# Claim carrying the authenticated user id
USER_ID_CLAIM = "userId"


class JWTManager:
    """
    JWT token manager for authentication.

    Handles creation and validation of HS256 access tokens signed with the
    shared secret.
    """

    def __init__(
        self,
        secret_key: Optional[str] = None,
        algorithm: Optional[str] = None,
        access_token_expire_minutes: Optional[int] = None,
    ):
        """
        Initialize JWT manager.

        Args:
            secret_key: Secret key for signing tokens (defaults to settings)
            algorithm: JWT algorithm (defaults to settings)
            access_token_expire_minutes: Access token lifetime in minutes
        """
        self.secret_key = secret_key or settings.security.SECRET_KEY
        self.algorithm = algorithm or settings.security.JWT_ALGORITHM
        self.access_token_expire_minutes = (
            access_token_expire_minutes or settings.security.ACCESS_TOKEN_EXPIRE_MINUTES
        )

    def create_access_token(
        self,
        user_id: Union[UUID, str],
        additional_claims: Optional[Dict[str, Any]] = None,
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        """
        Create JWT access token.

        Args:
            user_id: User identifier
            additional_claims: Additional claims to include
            expires_delta: Custom expiration time (may be negative in tests)

        Returns:
            Encoded JWT token
        """
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta if expires_delta is not None
                        else timedelta(minutes=self.access_token_expire_minutes))

        payload = {
            USER_ID_CLAIM: str(user_id),
            "iat": now,
            "exp": expire,
            "jti": secrets.token_hex(16),
        }
        if additional_claims:
            payload.update(additional_claims)

        token = jwt.encode(payload, self.secret_key, algorithm=self.algorithm)
        logger.debug(f"Access token created for user {user_id}")
        return token

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode JWT token.

        Raises:
            TokenExpiredError: If token is expired
            InvalidTokenError: If token is invalid or has no user id
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError as e:
            logger.warning("Token verification failed: token expired")
            raise TokenExpiredError() from e
        except jwt.InvalidTokenError as e:
            logger.warning(f"Token verification failed: {e}")
            raise InvalidTokenError() from e

        if not payload.get(USER_ID_CLAIM):
            logger.warning("Token verification failed: missing user id claim")
            raise InvalidTokenError()
        return payload

    def get_user_id(self, token: str) -> str:
        """Verified user id carried by the token."""
        return str(self.verify_token(token)[USER_ID_CLAIM])


__all__ = ["JWTManager", "USER_ID_CLAIM"]
