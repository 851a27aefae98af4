"""Authentication endpoints: registration, login, token rotation and account management."""

from fastapi import APIRouter, Depends, status

from finboss.api.deps import (
    CurrentUser,
    get_auth_service,
    get_budget_repository,
    get_category_repository,
    get_token_service,
    get_transaction_repository,
)
from finboss.repositories.budget import BudgetRepository
from finboss.repositories.category import CategoryRepository
from finboss.repositories.transaction import TransactionRepository
from finboss.schemas.auth import (
    AuthResult,
    LoginRequest,
    PasswordChange,
    Preferences,
    PreferencesUpdate,
    ProfileUpdate,
    RefreshRequest,
    TokenPair,
    UserProfile,
    UserRegister,
)
from finboss.schemas.common import MessageResponse, SuccessResponse
from finboss.services.auth import AuthService
from finboss.services.tokens import TokenService

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post(
    "/register",
    response_model=SuccessResponse[AuthResult],
    status_code=status.HTTP_201_CREATED,
    summary="Register new user",
    description="Create an account and receive an access/refresh token pair.",
)
async def register(
    data: UserRegister,
    auth_service: AuthService = Depends(get_auth_service),
) -> SuccessResponse[AuthResult]:
    """
    Register a new user account.

    Raises:
        400: Validation error
        409: Email already registered
    """
    result = await auth_service.register(
        email=data.email,
        password=data.password,
        first_name=data.first_name,
        last_name=data.last_name,
    )
    return SuccessResponse(message="User registered successfully", data=result)


@router.post(
    "/login",
    response_model=SuccessResponse[AuthResult],
    summary="User login",
    description="Authenticate with email and password to receive JWT tokens.",
)
async def login(
    data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
) -> SuccessResponse[AuthResult]:
    """
    Authenticate user and return JWT tokens.

    Raises:
        401: Invalid credentials
    """
    result = await auth_service.login(email=data.email, password=data.password)
    return SuccessResponse(message="Login successful", data=result)


@router.post(
    "/refresh",
    response_model=SuccessResponse[TokenPair],
    summary="Rotate refresh token",
    description="""
    Exchange a refresh token for a new access/refresh pair.

    Refresh tokens are single use. Presenting one that was already used
    revokes every session of its user.
    """,
)
async def refresh_token(
    data: RefreshRequest,
    token_service: TokenService = Depends(get_token_service),
) -> SuccessResponse[TokenPair]:
    pair = await token_service.refresh(data.refresh_token)
    return SuccessResponse(message="Token refreshed successfully", data=pair)


@router.post("/logout", response_model=MessageResponse, summary="Revoke one session")
async def logout(
    data: RefreshRequest,
    current_user: CurrentUser,
    auth_service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    await auth_service.logout(current_user, data.refresh_token)
    return MessageResponse(message="Logged out successfully")


@router.get("/profile", response_model=SuccessResponse[UserProfile], summary="Get profile")
async def get_profile(current_user: CurrentUser) -> SuccessResponse[UserProfile]:
    return SuccessResponse(data=UserProfile.model_validate(current_user))


@router.put("/profile", response_model=SuccessResponse[UserProfile], summary="Update profile")
async def update_profile(
    data: ProfileUpdate,
    current_user: CurrentUser,
    auth_service: AuthService = Depends(get_auth_service),
) -> SuccessResponse[UserProfile]:
    """
    Update name and/or email.

    Raises:
        409: Email already in use
    """
    user = await auth_service.update_profile(
        current_user,
        first_name=data.first_name,
        last_name=data.last_name,
        email=data.email,
    )
    return SuccessResponse(
        message="Profile updated successfully", data=UserProfile.model_validate(user)
    )


@router.post(
    "/change-password",
    response_model=MessageResponse,
    summary="Change password",
    description="Change the password. Every outstanding refresh token is revoked.",
)
async def change_password(
    data: PasswordChange,
    current_user: CurrentUser,
    auth_service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    await auth_service.change_password(
        current_user, data.current_password, data.new_password
    )
    return MessageResponse(message="Password changed successfully")


@router.delete(
    "/account",
    response_model=MessageResponse,
    summary="Delete account",
    description="Delete the account together with its transactions, budgets and custom categories.",
)
async def delete_account(
    current_user: CurrentUser,
    auth_service: AuthService = Depends(get_auth_service),
    transaction_repo: TransactionRepository = Depends(get_transaction_repository),
    budget_repo: BudgetRepository = Depends(get_budget_repository),
    category_repo: CategoryRepository = Depends(get_category_repository),
) -> MessageResponse:
    await auth_service.delete_account(
        current_user, transaction_repo, budget_repo, category_repo
    )
    return MessageResponse(message="Account deleted successfully")


@router.get(
    "/preferences", response_model=SuccessResponse[Preferences], summary="Get preferences"
)
async def get_preferences(current_user: CurrentUser) -> SuccessResponse[Preferences]:
    return SuccessResponse(data=AuthService.get_preferences(current_user))


@router.post(
    "/preferences", response_model=SuccessResponse[Preferences], summary="Save preferences"
)
async def save_preferences(
    data: PreferencesUpdate,
    current_user: CurrentUser,
    auth_service: AuthService = Depends(get_auth_service),
) -> SuccessResponse[Preferences]:
    """
    Update notification flags.

    Raises:
        400: No preference given
    """
    prefs = await auth_service.save_preferences(
        current_user, data.model_dump(exclude_unset=True)
    )
    return SuccessResponse(message="Preferences saved successfully", data=prefs)
