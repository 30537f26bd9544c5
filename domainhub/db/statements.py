"""
Structured Statements
Typed query objects passed to every DatabaseConnection. Backends translate the
structure directly; SQL backends render it with to_sql().
"""

import json
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

@dataclass(frozen=True)
class Condition:
    """Equality condition on a column of the statement's base table"""
    column: str
    value: Any

@dataclass(frozen=True)
class Join:
    """Join onto another table, exposing selected columns under alias names"""
    table: str
    local_key: str
    columns: Dict[str, str]  # joined column -> alias in the result row
    required: bool = True    # inner join when True, left join otherwise
    foreign_key: str = 'id'

    def join_clause(self, base_table: str) -> str:
        keyword = 'JOIN' if self.required else 'LEFT JOIN'
        return (f"{keyword} {self.table} "
                f"ON {base_table}.{self.local_key} = {self.table}.{self.foreign_key}")

@dataclass(frozen=True)
class OrderBy:
    column: str
    descending: bool = False

def _where(table: str, filters: Sequence[Condition]) -> Tuple[str, List[Any]]:
    if not filters:
        return '', []
    clause = ' AND '.join(f"{table}.{c.column} = %s" for c in filters)
    return f" WHERE {clause}", [c.value for c in filters]

@dataclass
class Select:
    """Read rows (or a row count) from one table plus optional joins"""
    table: str
    filters: List[Condition] = field(default_factory=list)
    joins: List[Join] = field(default_factory=list)
    order_by: Optional[OrderBy] = None
    limit: Optional[int] = None
    offset: int = 0
    count_only: bool = False

    def to_sql(self) -> Tuple[str, List[Any]]:
        if self.count_only:
            columns = 'COUNT(*) AS count'
        else:
            columns = ', '.join(
                [f"{self.table}.*"] +
                [f"{j.table}.{source} AS {alias}"
                 for j in self.joins for source, alias in j.columns.items()]
            )

        sql = f"SELECT {columns} FROM {self.table}"
        for join in self.joins:
            sql += f" {join.join_clause(self.table)}"

        where, params = _where(self.table, self.filters)
        sql += where

        if self.count_only:
            return sql, params

        if self.order_by:
            direction = 'DESC' if self.order_by.descending else 'ASC'
            sql += f" ORDER BY {self.table}.{self.order_by.column} {direction}"

        if self.limit is not None:
            sql += " LIMIT %s OFFSET %s"
            params += [self.limit, self.offset]

        return sql, params

@dataclass
class Insert:
    table: str
    values: Dict[str, Any]

    def to_sql(self) -> Tuple[str, List[Any]]:
        columns = ', '.join(self.values.keys())
        placeholders = ', '.join(['%s'] * len(self.values))
        return (f"INSERT INTO {self.table} ({columns}) VALUES ({placeholders})",
                list(self.values.values()))

@dataclass
class Update:
    table: str
    values: Dict[str, Any]
    filters: List[Condition] = field(default_factory=list)

    def to_sql(self) -> Tuple[str, List[Any]]:
        set_clause = ', '.join(f"{column} = %s" for column in self.values)
        where, params = _where(self.table, self.filters)
        return (f"UPDATE {self.table} SET {set_clause}{where}",
                list(self.values.values()) + params)

@dataclass
class Delete:
    table: str
    filters: List[Condition] = field(default_factory=list)

    def to_sql(self) -> Tuple[str, List[Any]]:
        where, params = _where(self.table, self.filters)
        return f"DELETE FROM {self.table}{where}", params

@dataclass
class CreateTable:
    table: str
    columns: List[Tuple[str, str]]
    constraints: List[str] = field(default_factory=list)

    def to_sql(self) -> Tuple[str, List[Any]]:
        definitions = [f"{name} {definition}" for name, definition in self.columns]
        definitions += self.constraints
        body = ',\n  '.join(definitions)
        return f"CREATE TABLE IF NOT EXISTS {self.table} (\n  {body}\n)", []

def sql_literal(value: Any) -> str:
    """Inline a value into SQL text for dumps and exports"""
    if value is None:
        return 'NULL'
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return 'TRUE' if value else 'FALSE'
    if isinstance(value, (int, float, Decimal)):
        return str(value)
    if isinstance(value, (datetime, date)):
        value = value.isoformat()
    elif isinstance(value, (dict, list)):
        value = json.dumps(value, default=str)
    escaped = str(value).replace("'", "''")
    return f"'{escaped}'"

def insert_block(table: str, rows: List[Dict[str, Any]]) -> str:
    """One multi-row INSERT statement covering every row of a table"""
    if not rows:
        return ''
    columns = list(rows[0].keys())
    values = ',\n'.join(
        f"({', '.join(sql_literal(row.get(column)) for column in columns)})"
        for row in rows
    )
    return f"INSERT INTO {table} ({', '.join(columns)}) VALUES\n{values};\n"
