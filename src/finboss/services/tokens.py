"""Refresh-token issuance and rotation with reuse detection."""

import logging
from uuid import UUID

from jose import JWTError

from finboss.config import settings
from finboss.core.exceptions import AuthenticationError
from finboss.core.security import (
    create_access_token,
    create_refresh_token,
    decode_refresh_token,
    hash_token,
)
from finboss.models.user import User
from finboss.repositories.refresh_token import RefreshTokenRepository
from finboss.repositories.user import UserRepository
from finboss.schemas.auth import TokenPair

logger = logging.getLogger(__name__)

INVALID_REFRESH_TOKEN = "Invalid or expired refresh token"


class TokenService:
    """Issues token pairs and rotates refresh tokens.

    Only a sha256 hash of each outstanding refresh token is stored, at most
    ``max_sessions`` per user (oldest evicted first). Every refresh consumes
    the presented token; presenting one that is no longer stored revokes all
    of the user's sessions.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        token_repo: RefreshTokenRepository,
        max_sessions: int | None = None,
    ):
        self.user_repo = user_repo
        self.token_repo = token_repo
        self.max_sessions = max_sessions or settings.max_sessions

    async def issue(self, user: User) -> TokenPair:
        """
        Create an access/refresh pair and store the refresh token's hash.

        Args:
            user: Token subject

        Returns:
            New token pair
        """
        access_token = create_access_token(user.id, user.email)
        refresh_token = create_refresh_token(user.id, user.email)
        await self.token_repo.add(user.id, hash_token(refresh_token), self.max_sessions)
        return TokenPair(access_token=access_token, refresh_token=refresh_token)

    async def refresh(self, raw_refresh_token: str) -> TokenPair:
        """
        Exchange a refresh token for a new pair (single use).

        Args:
            raw_refresh_token: Refresh token presented by the client

        Returns:
            New token pair

        Raises:
            AuthenticationError: If the token is invalid, expired, of the wrong
                type, or was already used (in which case all sessions of the
                user are revoked)
        """
        try:
            payload = decode_refresh_token(raw_refresh_token)
            user_id = UUID(payload["sub"])
        except (JWTError, ValueError):
            raise AuthenticationError(INVALID_REFRESH_TOKEN)

        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise AuthenticationError(INVALID_REFRESH_TOKEN)

        consumed = await self.token_repo.consume(user.id, hash_token(raw_refresh_token))
        if not consumed:
            revoked = await self.token_repo.remove_all(user.id)
            logger.warning(
                "Refresh token reuse detected; all sessions revoked",
                extra={"user_id": str(user.id), "revoked_sessions": revoked},
            )
            raise AuthenticationError(INVALID_REFRESH_TOKEN)

        return await self.issue(user)

    async def revoke(self, user_id: UUID, raw_refresh_token: str) -> None:
        """Remove one stored refresh token (logout). Unknown tokens are ignored."""
        await self.token_repo.consume(user_id, hash_token(raw_refresh_token))

    async def revoke_all(self, user_id: UUID, commit: bool = True) -> None:
        """Remove every stored refresh token of a user."""
        await self.token_repo.remove_all(user_id, commit=commit)
