"""Category share normalization, palette assignment and tree flattening."""

import math
from typing import Any, Iterable, Mapping, Sequence

from finreport.domain.entities import (
    Category,
    CategoryShare,
    CategorySpending,
    FlatCategory,
)
from finreport.domain.errors import DataInvariantViolation, ValidationError

# Chart and legend colors, in assignment order
PALETTE: tuple[str, ...] = (
    "#3b82f6",  # blue
    "#ef4444",  # red
    "#10b981",  # green
    "#f59e0b",  # amber
    "#8b5cf6",  # violet
    "#ec4899",  # pink
    "#06b6d4",  # cyan
    "#f97316",  # orange
    "#84cc16",  # lime
    "#6366f1",  # indigo
)

PERCENT_TOLERANCE = 0.01


def _field(entry: Any, name: str) -> Any:
    if isinstance(entry, Mapping):
        return entry[name]
    return getattr(entry, name)


def normalize(raw_totals: Mapping[int, Any]) -> list[CategoryShare]:
    """Compute each category's share of the grand total.

    Args:
        raw_totals: Mapping of category ID to an entry with ``name``,
            ``total`` and ``count`` (a dict or an object with those attributes)

    Returns:
        Shares ordered by total (highest first), then by name. Every
        percentage is 0 when the grand total is 0.

    Raises:
        ValidationError: If a total is negative
    """
    entries = []
    for category_id, entry in raw_totals.items():
        total = float(_field(entry, "total"))
        if total < 0:
            raise ValidationError(
                f"Category {category_id} has negative total {total:.2f}"
            )
        entries.append(
            (category_id, _field(entry, "name"), total, int(_field(entry, "count")))
        )

    grand_total = math.fsum(total for _, _, total, _ in entries)

    shares = [
        CategoryShare(
            category_id=category_id,
            name=name,
            total=total,
            count=count,
            percentage=(total / grand_total * 100) if grand_total > 0 else 0.0,
        )
        for category_id, name, total, count in entries
    ]
    shares.sort(key=lambda share: (-share.total, share.name or ""))
    return shares


def normalize_spending(rows: Iterable[CategorySpending]) -> list[CategoryShare]:
    """Normalize service rows from their raw totals alone.

    Any percentage already computed by the service is ignored. Rows sharing
    a category ID are merged.
    """
    merged: dict[int, dict[str, Any]] = {}
    for row in rows:
        entry = merged.setdefault(
            row.category_id, {"name": row.name, "total": 0.0, "count": 0}
        )
        entry["total"] += row.total
        entry["count"] += row.count
    return normalize(merged)


def check_share_invariant(shares: Sequence[CategoryShare]) -> None:
    """Verify that positive shares add up to 100 percent.

    Raises:
        DataInvariantViolation: If the percentages of a positive set do not
            sum to 100 within tolerance
    """
    if not any(share.total > 0 for share in shares):
        return
    percent_sum = math.fsum(share.percentage for share in shares)
    if abs(percent_sum - 100) > PERCENT_TOLERANCE:
        raise DataInvariantViolation(
            f"Category percentages sum to {percent_sum:.4f}, expected 100"
        )


def color_for_index(index: int, palette: Sequence[str] = PALETTE) -> str:
    """Return the palette color for a position in the display ordering."""
    if not palette:
        raise ValueError("Palette must contain at least one color")
    return palette[index % len(palette)]


def assign_colors(
    shares: Sequence[CategoryShare], palette: Sequence[str] = PALETTE
) -> list[tuple[CategoryShare, str]]:
    """Pair each share with its color so chart and legend stay aligned."""
    return [
        (share, color_for_index(index, palette)) for index, share in enumerate(shares)
    ]


def flatten_category_tree(categories: Iterable[Category]) -> list[FlatCategory]:
    """Project the category forest into a depth-first list with depth tags.

    Siblings are ordered by name. Categories whose parent is unknown are
    treated as roots.

    Raises:
        DataInvariantViolation: If the parent links contain a cycle
    """
    by_id = {category.id: category for category in categories}
    children_map: dict[int | None, list[Category]] = {}
    for category in by_id.values():
        parent_id = category.parent_id if category.parent_id in by_id else None
        children_map.setdefault(parent_id, []).append(category)
    for siblings in children_map.values():
        siblings.sort(key=lambda cat: (cat.name, cat.id))

    flattened: list[FlatCategory] = []
    visited: set[int] = set()

    def visit(category: Category, depth: int) -> None:
        visited.add(category.id)
        flattened.append(FlatCategory(category=category, depth=depth))
        for child in children_map.get(category.id, []):
            visit(child, depth + 1)

    for root in children_map.get(None, []):
        visit(root, 0)

    if len(visited) != len(by_id):
        stuck = sorted(set(by_id) - visited)
        raise DataInvariantViolation(
            f"Category parent links form a cycle: {', '.join(map(str, stuck))}"
        )
    return flattened
