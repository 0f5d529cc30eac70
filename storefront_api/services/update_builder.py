"""
Storefront API - Conditional UPDATE Builder
=============================================

What:  Builds an UPDATE statement whose SET list holds exactly the columns
       that were explicitly supplied.
How:   Accumulates (column, value) pairs, then renders them through
       SQLAlchemy Core `update(table).values(...)`. Values are always bound
       parameters; column names come from the table definition, never from
       client input.

Example:
    builder = UpdateBuilder(Customer.__table__)
    builder.set_supplied({"cust_city": "Boston"}, ["cust_name", "cust_city"])
    stmt = builder.build(Customer.cust_code == "c1")
    # UPDATE customer SET cust_city=:cust_city WHERE customer.cust_code = :cust_code_1
"""

from typing import Any, Iterable, List, Mapping, Tuple

from sqlalchemy import Table, update
from sqlalchemy.sql.expression import ColumnElement
from sqlalchemy.sql.dml import Update


class UpdateBuilder:
    """Collects column assignments for a single-table UPDATE."""

    def __init__(self, table: Table):
        self.table = table
        self._assignments: List[Tuple[str, Any]] = []

    def set(self, column: str, value: Any) -> "UpdateBuilder":
        """Add one assignment. Unknown columns raise KeyError."""
        if column not in self.table.c:
            raise KeyError(f"Table '{self.table.name}' has no column '{column}'")
        self._assignments = [(c, v) for c, v in self._assignments if c != column]
        self._assignments.append((column, value))
        return self

    def set_supplied(self, fields: Mapping[str, Any], allowed: Iterable[str]) -> "UpdateBuilder":
        """
        Add an assignment for each allowed column present as a key in `fields`.

        A key mapped to None is still an assignment (it writes NULL); a
        missing key is skipped.
        """
        for column in allowed:
            if column in fields:
                self.set(column, fields[column])
        return self

    @property
    def assignments(self) -> List[Tuple[str, Any]]:
        return list(self._assignments)

    @property
    def columns(self) -> List[str]:
        return [column for column, _ in self._assignments]

    def is_empty(self) -> bool:
        return not self._assignments

    def build(self, where: ColumnElement) -> Update:
        """Render the UPDATE. Raises ValueError when nothing was assigned."""
        if self.is_empty():
            raise ValueError("UPDATE requires at least one assignment")
        return update(self.table).where(where).values(dict(self._assignments))
