"""Security utilities."""

from travelplanner.core.security.jwt_handler import JWTManager, USER_ID_CLAIM

__all__ = ["JWTManager", "USER_ID_CLAIM"]
