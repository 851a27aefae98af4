"""Category service and default category seeding."""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from finboss.core.exceptions import ConflictError, NotFoundError
from finboss.models.category import Category
from finboss.repositories.category import CategoryRepository
from finboss.schemas.category import CategoryCreate, CategoryUpdate

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = [
    {"name": "Food & Dining", "type": "expense", "icon": "🍽️", "color": "#FF6B6B"},
    {"name": "Transportation", "type": "expense", "icon": "🚗", "color": "#4ECDC4"},
    {"name": "Entertainment", "type": "expense", "icon": "🎬", "color": "#FFE66D"},
    {"name": "Shopping", "type": "expense", "icon": "🛍️", "color": "#FF69B4"},
    {"name": "Utilities", "type": "expense", "icon": "💡", "color": "#95E1D3"},
    {"name": "Healthcare", "type": "expense", "icon": "🏥", "color": "#FF6F91"},
    {"name": "Education", "type": "expense", "icon": "📚", "color": "#A8E6CF"},
    {"name": "Travel", "type": "expense", "icon": "✈️", "color": "#FFD3B6"},
    {"name": "Subscriptions", "type": "expense", "icon": "📱", "color": "#FFAAA5"},
    {"name": "Salary", "type": "income", "icon": "💰", "color": "#6BCB77"},
    {"name": "Freelance", "type": "income", "icon": "💻", "color": "#4D96FF"},
    {"name": "Investment Returns", "type": "income", "icon": "📈", "color": "#FFD93D"},
    {"name": "Other", "type": "expense", "icon": "📌", "color": "#999999"},
]


async def seed_default_categories(session: AsyncSession) -> int:
    """
    Insert any missing default categories.

    Safe to run on every startup and from several processes at once.

    Returns:
        Number of categories inserted
    """
    repo = CategoryRepository(session)
    inserted = 0
    for default in DEFAULT_CATEGORIES:
        values = {**default, "name": default["name"].lower(), "is_default": True}
        if await repo.insert_default_if_absent(values):
            inserted += 1
    await session.commit()

    if inserted:
        logger.info("Seeded default categories", extra={"inserted": inserted})
    else:
        logger.info("All default categories already exist")
    return inserted


class CategoryService:
    """Service for category operations."""

    def __init__(self, category_repo: CategoryRepository):
        self.repo = category_repo

    async def list_visible(
        self, user_id: UUID | None, type: str | None = None
    ) -> list[Category]:
        return await self.repo.list_visible(user_id, type=type)

    async def create(self, user_id: UUID, data: CategoryCreate) -> Category:
        """
        Create a custom category owned by the user.

        Raises:
            ConflictError: If the name matches a default or one of the user's categories
        """
        name = data.name.strip().lower()
        if await self.repo.name_taken(name, user_id):
            raise ConflictError("Category already exists")

        category = Category(
            name=name,
            type=data.type,
            icon=data.icon,
            color=data.color,
            is_default=False,
            user_id=user_id,
        )
        return await self.repo.create(category)

    async def _get_owned(self, user_id: UUID, category_id: UUID) -> Category:
        # Defaults have no owner, so they never match here.
        category = await self.repo.get_by_user(user_id, category_id)
        if category is None:
            raise NotFoundError("Category not found")
        return category

    async def update(
        self, user_id: UUID, category_id: UUID, data: CategoryUpdate
    ) -> Category:
        category = await self._get_owned(user_id, category_id)
        changes = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}

        if "name" in changes:
            changes["name"] = changes["name"].strip().lower()
            if await self.repo.name_taken(changes["name"], user_id, exclude_id=category.id):
                raise ConflictError("Category name already exists")

        if not changes:
            return category
        return await self.repo.update(category, changes)

    async def delete(self, user_id: UUID, category_id: UUID) -> None:
        category = await self._get_owned(user_id, category_id)
        await self.repo.delete(category)
