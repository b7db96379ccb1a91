"""
Category registry: the fixed set of topical tags and their display colors.

The registry is defined at import time and never mutated.
"""

from enum import Enum
from typing import Dict, List, NamedTuple


ALL_CATEGORIES = "all"  # Filter sentinel, not a category


class Category(str, Enum):
    """Topical tag attached to every fact."""
    TECHNOLOGY = "technology"
    SCIENCE = "science"
    FINANCE = "finance"
    SOCIETY = "society"
    ENTERTAINMENT = "entertainment"
    HEALTH = "health"
    HISTORY = "history"
    NEWS = "news"


class CategoryInfo(NamedTuple):
    name: Category
    color: str


class UnknownCategory(LookupError):
    """Raised when a value outside the category set is looked up."""

    def __init__(self, value):
        super().__init__(f"Unknown category: {value!r}")
        self.value = value


# Display order used by front ends when listing filters
CATEGORIES: List[CategoryInfo] = [
    CategoryInfo(Category.TECHNOLOGY, "#3b82f6"),
    CategoryInfo(Category.SCIENCE, "#16a34a"),
    CategoryInfo(Category.FINANCE, "#ef4444"),
    CategoryInfo(Category.SOCIETY, "#eab308"),
    CategoryInfo(Category.ENTERTAINMENT, "#db2777"),
    CategoryInfo(Category.HEALTH, "#14b8a6"),
    CategoryInfo(Category.HISTORY, "#f97316"),
    CategoryInfo(Category.NEWS, "#8b5cf6"),
]

_COLORS: Dict[str, str] = {info.name.value: info.color for info in CATEGORIES}


def is_known_category(name) -> bool:
    """True if ``name`` is one of the registered categories."""
    if isinstance(name, Category):
        return True
    return isinstance(name, str) and name in _COLORS


def is_valid_filter(value) -> bool:
    """True for a known category or the "all" sentinel."""
    return value == ALL_CATEGORIES or is_known_category(value)


def color_of(category) -> str:
    """
    Get the display color for a category.

    Raises:
        UnknownCategory: if ``category`` is not in the registry
    """
    if not is_known_category(category):
        raise UnknownCategory(category)
    return _COLORS[Category(category).value]
