"""FastAPI dependency injection for authentication, database and services."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from finboss.core.exceptions import AuthenticationError, ValidationError
from finboss.core.periods import DateRange, parse_date_param, resolve_range
from finboss.core.security import get_user_id_from_token
from finboss.db.session import get_db
from finboss.models.user import User
from finboss.repositories.budget import BudgetRepository
from finboss.repositories.category import CategoryRepository
from finboss.repositories.refresh_token import RefreshTokenRepository
from finboss.repositories.transaction import TransactionRepository
from finboss.repositories.user import UserRepository
from finboss.services.analytics import AnalyticsService
from finboss.services.auth import AuthService
from finboss.services.budget import BudgetService
from finboss.services.category import CategoryService
from finboss.services.tokens import TokenService
from finboss.services.transaction import TransactionService

# Missing credentials are reported as 401 by get_current_user, not 403.
security = HTTPBearer(auto_error=False)

NO_TOKEN = "No authorization token provided"
INVALID_ACCESS_TOKEN = "Invalid or expired access token"


async def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


async def get_transaction_repository(
    db: AsyncSession = Depends(get_db),
) -> TransactionRepository:
    return TransactionRepository(db)


async def get_budget_repository(db: AsyncSession = Depends(get_db)) -> BudgetRepository:
    return BudgetRepository(db)


async def get_category_repository(
    db: AsyncSession = Depends(get_db),
) -> CategoryRepository:
    return CategoryRepository(db)


async def get_token_service(
    db: AsyncSession = Depends(get_db),
    user_repo: UserRepository = Depends(get_user_repository),
) -> TokenService:
    return TokenService(user_repo, RefreshTokenRepository(db))


async def get_auth_service(
    user_repo: UserRepository = Depends(get_user_repository),
    token_service: TokenService = Depends(get_token_service),
) -> AuthService:
    """
    Get authentication service instance.

    Args:
        user_repo: User repository
        token_service: Token issuance and rotation

    Returns:
        AuthService instance
    """
    return AuthService(user_repo, token_service)


async def get_transaction_service(
    repo: TransactionRepository = Depends(get_transaction_repository),
) -> TransactionService:
    return TransactionService(repo)


async def get_budget_service(
    budget_repo: BudgetRepository = Depends(get_budget_repository),
    transaction_repo: TransactionRepository = Depends(get_transaction_repository),
) -> BudgetService:
    return BudgetService(budget_repo, transaction_repo)


async def get_category_service(
    repo: CategoryRepository = Depends(get_category_repository),
) -> CategoryService:
    return CategoryService(repo)


async def get_analytics_service(
    budget_repo: BudgetRepository = Depends(get_budget_repository),
    transaction_repo: TransactionRepository = Depends(get_transaction_repository),
) -> AnalyticsService:
    return AnalyticsService(budget_repo, transaction_repo)


async def _user_from_credentials(
    credentials: HTTPAuthorizationCredentials, user_repo: UserRepository
) -> User:
    try:
        user_id = get_user_id_from_token(credentials.credentials)
    except (JWTError, ValueError):
        raise AuthenticationError(INVALID_ACCESS_TOKEN)

    user = await user_repo.get_by_id(user_id)
    if user is None:
        raise AuthenticationError(INVALID_ACCESS_TOKEN)
    return user


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    user_repo: UserRepository = Depends(get_user_repository),
) -> User:
    """
    Extract and validate user from JWT access token.

    Args:
        credentials: HTTP bearer token credentials
        user_repo: User repository for database queries

    Returns:
        Authenticated user object

    Raises:
        AuthenticationError: If the token is missing, invalid, expired, a
            refresh token, or its user no longer exists
    """
    if credentials is None:
        raise AuthenticationError(NO_TOKEN)
    return await _user_from_credentials(credentials, user_repo)


async def get_optional_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    user_repo: UserRepository = Depends(get_user_repository),
) -> UUID | None:
    """User ID when a bearer token is sent, None for anonymous callers.

    A token that is present but invalid is still rejected.
    """
    if credentials is None:
        return None
    user = await _user_from_credentials(credentials, user_repo)
    return user.id


async def get_date_range(
    start_date: Annotated[
        str | None,
        Query(alias="startDate", description="From date (inclusive), YYYY-MM-DD or ISO-8601"),
    ] = None,
    end_date: Annotated[
        str | None,
        Query(alias="endDate", description="To date (inclusive), YYYY-MM-DD or ISO-8601"),
    ] = None,
) -> DateRange:
    """
    Parse the optional ``startDate``/``endDate`` query pair.

    Raises:
        ValidationError: If a date is malformed or the range is inverted
    """
    try:
        return resolve_range(parse_date_param(start_date), parse_date_param(end_date))
    except ValueError as exc:
        raise ValidationError(f"Invalid date range: {exc}")


CurrentUser = Annotated[User, Depends(get_current_user)]
DateRangeParams = Annotated[DateRange, Depends(get_date_range)]
