"""
Order Query Builder

Accumulates typed (column, operator, value) predicates and renders them
into a parameterized WHERE clause with asyncpg positional placeholders.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from enum import Enum
from typing import Any, List, Optional, Tuple

from .models import OrderFilter


class Operator(str, Enum):
    """Comparison operators a predicate may use"""
    EQ = "="
    GTE = ">="
    LTE = "<="
    LT = "<"


# Columns a predicate may reference, qualified by the order header alias
FILTERABLE_COLUMNS = frozenset({
    "o.id",
    "o.customer_id",
    "o.status_id",
    "o.total",
    "o.created_at",
})


@dataclass(frozen=True)
class Predicate:
    column: str
    operator: Operator
    value: Any


def _start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


class OrderQueryBuilder:
    """
    Builder for the WHERE clause of order queries.

    Values never reach the SQL text; they are returned alongside it as
    positional parameters. Columns are checked against FILTERABLE_COLUMNS.
    """

    def __init__(self):
        self._predicates: List[Predicate] = []

    @property
    def predicates(self) -> List[Predicate]:
        return list(self._predicates)

    def where(self, column: str, operator: Operator, value: Any) -> "OrderQueryBuilder":
        """Add a predicate; a None value means the filter is absent"""
        if value is None:
            return self
        if column not in FILTERABLE_COLUMNS:
            raise ValueError(f"Column not filterable: {column}")
        self._predicates.append(Predicate(column, Operator(operator), value))
        return self

    def order_id(self, order_id: int) -> "OrderQueryBuilder":
        return self.where("o.id", Operator.EQ, order_id)

    def customer(self, customer_id: Optional[int]) -> "OrderQueryBuilder":
        return self.where("o.customer_id", Operator.EQ, customer_id)

    def status(self, status_id: Optional[int]) -> "OrderQueryBuilder":
        return self.where("o.status_id", Operator.EQ, status_id)

    def total_between(self, min_total=None, max_total=None) -> "OrderQueryBuilder":
        """Inclusive on both bounds"""
        self.where("o.total", Operator.GTE, min_total)
        return self.where("o.total", Operator.LTE, max_total)

    def created_between(
        self,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> "OrderQueryBuilder":
        """Inclusive on both bounds; date_to covers the whole day"""
        if date_from is not None:
            self.where("o.created_at", Operator.GTE, _start_of_day(date_from))
        if date_to is not None:
            self.where("o.created_at", Operator.LT, _start_of_day(date_to + timedelta(days=1)))
        return self

    @classmethod
    def from_filter(cls, filters: Optional[OrderFilter]) -> "OrderQueryBuilder":
        """Builder populated from the public filter model"""
        builder = cls()
        if filters is None:
            return builder
        return (
            builder
            .customer(filters.customer_id)
            .status(filters.status_id)
            .total_between(filters.min_total, filters.max_total)
            .created_between(filters.date_from, filters.date_to)
        )

    def render_where(self, start_index: int = 1) -> Tuple[str, List[Any]]:
        """
        Render ``(where_clause, params)``.

        Returns ``("TRUE", [])`` when no predicate was added.
        """
        conditions = []
        params = []
        for offset, predicate in enumerate(self._predicates):
            conditions.append(f"{predicate.column} {predicate.operator.value} ${start_index + offset}")
            params.append(predicate.value)

        where_clause = " AND ".join(conditions) if conditions else "TRUE"
        return where_clause, params
