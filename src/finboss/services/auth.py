"""Authentication and account service with business logic."""

import logging

from finboss.core.exceptions import (
    AuthenticationError,
    ConflictError,
    ValidationError,
)
from finboss.core.security import hash_password, verify_password
from finboss.models.user import User
from finboss.repositories.budget import BudgetRepository
from finboss.repositories.category import CategoryRepository
from finboss.repositories.transaction import TransactionRepository
from finboss.repositories.user import UserRepository
from finboss.schemas.auth import AuthResult, Preferences
from finboss.services.tokens import TokenService

logger = logging.getLogger(__name__)

PREFERENCE_FIELDS = ("email_notifications", "budget_alerts", "weekly_report")


class AuthService:
    """Service for authentication and account operations."""

    def __init__(self, user_repo: UserRepository, token_service: TokenService):
        """
        Initialize authentication service.

        Args:
            user_repo: User repository for database operations
            token_service: Issues and revokes token pairs
        """
        self.user_repo = user_repo
        self.tokens = token_service

    async def _auth_result(self, user: User) -> AuthResult:
        pair = await self.tokens.issue(user)
        return AuthResult(
            user_id=user.id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            access_token=pair.access_token,
            refresh_token=pair.refresh_token,
        )

    async def register(
        self, email: str, password: str, first_name: str, last_name: str
    ) -> AuthResult:
        """
        Register a new user and sign them in.

        Raises:
            ConflictError: If email already exists
        """
        email = email.lower()
        if await self.user_repo.email_exists(email):
            raise ConflictError("Email already registered")

        user = User(
            email=email,
            password_hash=hash_password(password),
            first_name=first_name.strip(),
            last_name=last_name.strip(),
        )
        created_user = await self.user_repo.create(user)
        logger.info("User registered", extra={"user_id": str(created_user.id)})
        return await self._auth_result(created_user)

    async def login(self, email: str, password: str) -> AuthResult:
        """
        Authenticate user and return JWT tokens.

        Raises:
            AuthenticationError: If credentials are invalid
        """
        user = await self.user_repo.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            raise AuthenticationError("Invalid email or password")

        return await self._auth_result(user)

    async def logout(self, user: User, refresh_token: str) -> None:
        await self.tokens.revoke(user.id, refresh_token)

    async def update_profile(
        self,
        user: User,
        first_name: str | None = None,
        last_name: str | None = None,
        email: str | None = None,
    ) -> User:
        """
        Update name and/or email.

        Raises:
            ConflictError: If the new email belongs to another account
        """
        changes: dict = {}
        if email and email.lower() != user.email:
            if await self.user_repo.email_exists(email):
                raise ConflictError("Email already in use")
            changes["email"] = email.lower()
        if first_name:
            changes["first_name"] = first_name.strip()
        if last_name:
            changes["last_name"] = last_name.strip()

        if not changes:
            return user
        return await self.user_repo.update(user, changes)

    async def change_password(
        self, user: User, current_password: str, new_password: str
    ) -> None:
        """
        Change the password and sign out every session.

        Raises:
            AuthenticationError: If the current password is wrong
        """
        if not verify_password(current_password, user.password_hash):
            raise AuthenticationError("Current password is incorrect")

        await self.user_repo.update(user, {"password_hash": hash_password(new_password)})
        await self.tokens.revoke_all(user.id)
        logger.info("Password changed; sessions revoked", extra={"user_id": str(user.id)})

    async def delete_account(
        self,
        user: User,
        transaction_repo: TransactionRepository,
        budget_repo: BudgetRepository,
        category_repo: CategoryRepository,
    ) -> None:
        """Delete the user together with everything they own."""
        db = self.user_repo.db
        await transaction_repo.delete_all_by_user(user.id)
        await budget_repo.delete_all_by_user(user.id)
        await category_repo.delete_all_by_user(user.id)
        await self.tokens.revoke_all(user.id, commit=False)
        await db.delete(user)
        await db.commit()
        logger.info("Account deleted", extra={"user_id": str(user.id)})

    @staticmethod
    def get_preferences(user: User) -> Preferences:
        return Preferences.model_validate(user)

    async def save_preferences(self, user: User, updates: dict) -> Preferences:
        """
        Update notification flags.

        Raises:
            ValidationError: If no flag is provided
        """
        changes = {
            key: value
            for key, value in updates.items()
            if key in PREFERENCE_FIELDS and value is not None
        }
        if not changes:
            raise ValidationError("At least one preference must be provided")

        user = await self.user_repo.update(user, changes)
        return Preferences.model_validate(user)
