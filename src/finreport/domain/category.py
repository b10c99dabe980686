"""Category domain service."""

from typing import Optional

from finreport.database.base import Database
from finreport.domain.categories import flatten_category_tree
from finreport.domain.entities import Category, FlatCategory, TransactionKind
from finreport.domain.errors import (
    NotFoundError,
    ValidationError,
    category_path_not_found,
)


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(
        self,
        name: str,
        parent_path: Optional[str] = None,
        kind: TransactionKind = TransactionKind.EXPENSE,
    ) -> int:
        """Create a category.

        A child category always takes the kind of its parent.

        Args:
            name: Category name
            parent_path: Optional parent category path (e.g., "Food & Dining")
            kind: INCOME or EXPENSE, used for root categories

        Returns:
            Category ID

        Raises:
            ValidationError: If the kind is TRANSFER
            NotFoundError: If parent category doesn't exist
        """
        if kind == TransactionKind.TRANSFER:
            raise ValidationError("Categories are for income or expense, not transfers")

        parent_id = None
        if parent_path is not None:
            parent = self.require_category_by_path(parent_path)
            parent_id = parent.id
            kind = parent.kind

        return self.db.create_category(name=name, parent_id=parent_id, kind=kind)

    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        return self.db.get_category(category_id)

    def get_category_by_path(self, path: str) -> Optional[Category]:
        """Get category by path (e.g., "Food & Dining > Groceries")."""
        return self.db.get_category_by_path(path)

    def require_category_by_path(self, path: str) -> Category:
        """Get category by path, raising if it does not exist.

        Raises:
            NotFoundError: If no category has that path
        """
        category = self.db.get_category_by_path(path)
        if category is None:
            raise NotFoundError(category_path_not_found(path))
        return category

    def list_categories(self, parent_id: Optional[int] = None) -> list[Category]:
        """List categories, optionally only the children of one parent."""
        return self.db.list_categories(parent_id=parent_id)

    def get_flat_tree(self) -> list[FlatCategory]:
        """Get all categories in depth-first order with depth tags."""
        return flatten_category_tree(self.db.list_categories())

    def format_category_path(self, category_id: int) -> str:
        """Get full path for a category (e.g., "Food & Dining > Groceries")."""
        categories = {cat.id: cat for cat in self.db.list_categories()}
        cat = categories.get(category_id)
        if cat is None:
            return ""

        path_parts = [cat.name]
        seen = {cat.id}
        while cat.parent_id is not None and cat.parent_id not in seen:
            cat = categories.get(cat.parent_id)
            if cat is None:
                break
            seen.add(cat.id)
            path_parts.append(cat.name)

        return " > ".join(reversed(path_parts))
