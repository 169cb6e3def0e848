"""
JWT token handler for bearer authentication.
Validates JWT tokens and extracts the acting user.
"""

from typing import Optional, Dict, Any
from datetime import datetime, timedelta
from jose import JWTError, jwt as jose_jwt

from buildtrack.config import get_settings
from buildtrack.domain.models.base import ValidationError


class JWTHandler:
    """Handles JWT token validation and user extraction."""

    def __init__(self, secret_key: Optional[str] = None, algorithm: Optional[str] = None):
        self.settings = get_settings()
        self.jwt_secret = secret_key or self.settings.jwt_secret_key
        self.jwt_algorithm = algorithm or self.settings.jwt_algorithm

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode a JWT token.

        Args:
            token: JWT token string

        Returns:
            Dict containing token payload

        Raises:
            ValidationError: If token is invalid or expired
        """
        # Remove 'Bearer ' prefix if present
        if token.startswith('Bearer '):
            token = token[7:]

        try:
            payload = jose_jwt.decode(
                token,
                self.jwt_secret,
                algorithms=[self.jwt_algorithm],
                options={"verify_exp": True, "verify_aud": False}
            )
        except JWTError as e:
            raise ValidationError(f"Invalid JWT token: {str(e)}")

        # Validate required claims
        if not payload.get('sub'):
            raise ValidationError("Token missing user ID (sub claim)")

        return payload

    def get_user_id(self, token: str) -> str:
        """
        Extract user ID from JWT token.

        Raises:
            ValidationError: If token is invalid
        """
        payload = self.verify_token(token)
        return str(payload['sub'])

    def is_token_valid(self, token: str) -> bool:
        """Check if token is valid without raising exceptions."""
        try:
            self.verify_token(token)
            return True
        except ValidationError:
            return False

    def create_access_token(
        self,
        user_id: str,
        expires_minutes: Optional[int] = None,
        extra_claims: Optional[Dict[str, Any]] = None
    ) -> str:
        """
        Issue a signed access token for the given user.

        Args:
            user_id: Subject of the token
            expires_minutes: Lifetime, defaults to the configured expiry
            extra_claims: Additional claims merged into the payload

        Returns:
            JWT token string
        """
        now = datetime.utcnow()
        lifetime = expires_minutes or self.settings.jwt_access_token_expire_minutes
        expire = now + timedelta(minutes=lifetime)

        payload = {
            "sub": user_id,
            "iat": int(now.timestamp()),
            "exp": int(expire.timestamp()),
        }
        payload.update(extra_claims or {})

        return jose_jwt.encode(payload, self.jwt_secret, algorithm=self.jwt_algorithm)
