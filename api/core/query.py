"""
Paginated list query builder (raw SQL for asyncpg).

One `PaginatedQuery` yields two statements over the same filters:
- count:  SELECT COUNT(*) ... WHERE <filters>
- select: SELECT <columns> ... WHERE <filters> ORDER BY nome, id LIMIT/OFFSET

Table and column names only ever come from constants in this codebase.
Every user-supplied value is bound as a parameter; the builder keeps an
ordered name -> value map and renders asyncpg `$n` placeholders from it.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from . import db
from .pagination import ListFilter, SortOrder

ILIKE = "ilike"
ILIKE_ALL = "ilike_all"
ANY = "any"
CONTAINS = "contains"
EQ = "eq"


def escape_like(value: str) -> str:
    """
    Escape LIKE/ILIKE metacharacters so they match literally.

    The backslash goes first, otherwise the escapes added for % and _ would
    be doubled.
    """
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def contains_pattern(value: str) -> str:
    return "%" + escape_like(value) + "%"


@dataclass(frozen=True)
class Predicate:
    """
    Declarative description of one optional filter.

    op:
    - ilike      column ILIKE '%value%' (escaped)
    - ilike_all  one ILIKE clause per value, AND-combined
    - any        column = ANY(values)
    - contains   array column @> values (all of them)
    - eq         column = value
    """

    column: str
    op: str


class PaginatedQuery:
    def __init__(self, table: str, columns: str, *, name_column: str = "nome") -> None:
        self.table = table
        self.columns = columns
        self.name_column = name_column
        self.args: dict[str, Any] = {}
        self.conditions: list[str] = ["1=1"]
        self.sort = SortOrder.ASC
        self.limit: int | None = None
        self.offset = 0

    def bind(self, name: str, value: Any) -> str:
        if name in self.args:
            raise ValueError(f"Parameter {name!r} is already bound.")
        self.args[name] = value
        return f"${len(self.args)}"

    def where(self, condition: str) -> PaginatedQuery:
        self.conditions.append(condition)
        return self

    def filter(self, predicate: Predicate, name: str, value: Any) -> PaginatedQuery:
        """
        Append the clause(s) for one predicate. `None` and empty collections
        mean "not requested" and add nothing.
        """
        if value is None:
            return self
        if isinstance(value, (list, tuple)) and not value:
            return self

        column = predicate.column
        if predicate.op == ILIKE:
            self.where(f"{column} ILIKE {self.bind(name, contains_pattern(value))}")
        elif predicate.op == ILIKE_ALL:
            for i, item in enumerate(value):
                self.where(f"{column} ILIKE {self.bind(f'{name}_{i}', contains_pattern(item))}")
        elif predicate.op == ANY:
            self.where(f"{column} = ANY({self.bind(name, list(value))})")
        elif predicate.op == CONTAINS:
            self.where(f"{column} @> {self.bind(name, list(value))}")
        elif predicate.op == EQ:
            self.where(f"{column} = {self.bind(name, value)}")
        else:
            raise ValueError(f"Unknown predicate op: {predicate.op!r}")
        return self

    def apply_list_filter(self, list_filter: ListFilter) -> PaginatedQuery:
        self.filter(Predicate(self.name_column, ILIKE), "nome", list_filter.nome)
        self.filter(
            Predicate("documentazione_di_riferimento", ANY),
            "docs",
            list_filter.documentazione_di_riferimento,
        )
        self.sort = list_filter.sort
        self.limit = list_filter.limit
        self.offset = list_filter.offset
        return self

    def _where_sql(self) -> str:
        return " AND ".join(self.conditions)

    def count_sql(self) -> str:
        return f"SELECT COUNT(*) FROM {self.table} WHERE {self._where_sql()}"

    def count_args(self) -> list[Any]:
        return list(self.args.values())

    def select_sql(self) -> str:
        direction = "DESC" if self.sort == SortOrder.DESC else "ASC"
        sql = (
            f"SELECT {self.columns} FROM {self.table} WHERE {self._where_sql()}"
            f" ORDER BY {self.name_column} {direction}, id {direction}"
        )
        if self.limit is None:
            return sql
        n = len(self.args)
        return sql + f" LIMIT ${n + 1} OFFSET ${n + 2}"

    def select_args(self) -> list[Any]:
        args = list(self.args.values())
        if self.limit is None:
            return args
        return [*args, self.limit, self.offset]

    async def count(self) -> int:
        total = await db.fetch_val(self.count_sql(), *self.count_args())
        return int(total or 0)

    async def rows(self) -> list[dict[str, Any]]:
        return await db.fetch_all(self.select_sql(), *self.select_args())


def columns_sql(columns: Sequence[str]) -> str:
    return ", ".join(columns)
