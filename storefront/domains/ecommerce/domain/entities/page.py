"""
Paginated provider listing.
"""

from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    items: list[T] = field(default_factory=list)
    current_page: int = 1
    last_page: int = 1
    total: int = 0
    per_page: int | None = None

    @property
    def has_next(self) -> bool:
        return self.current_page < self.last_page

    @property
    def has_prev(self) -> bool:
        return self.current_page > 1
