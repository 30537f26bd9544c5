"""
In-Memory Database Connection
Deterministic stand-in for a relational store, pre-seeded with demo data so
the dashboard works without any external service
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from domainhub.db.connection import DatabaseConnection, ExecuteResult, T
from domainhub.db.fixtures import build_clients, build_domains, build_hosting
from domainhub.db.schema import (
    AUTO_INCREMENT_TABLES, BACKUP_LOGS, CLIENTS, DOMAINS, HOSTING, PAYMENTS,
)
from domainhub.db.statements import (
    Condition, CreateTable, Delete, Insert, Join, Select, Update,
)
from domainhub.utils.exceptions import QueryException

logger = logging.getLogger(__name__)

class MockDatabaseConnection(DatabaseConnection):
    """Table name -> list of row dicts, kept for the lifetime of the process"""

    backend_name = 'mock'

    def __init__(self, seed: bool = True):
        self.data: Dict[str, List[Dict[str, Any]]] = {
            CLIENTS: [],
            DOMAINS: [],
            HOSTING: [],
            PAYMENTS: [],
            BACKUP_LOGS: [],
        }
        self.last_id = 0

        if seed:
            self._initialize_sample_data()

    def _initialize_sample_data(self):
        self.data[CLIENTS] = build_clients()
        self.data[DOMAINS] = build_domains()
        self.data[HOSTING] = build_hosting()
        logger.info(
            f"Mock database seeded with {len(self.data[CLIENTS])} clients, "
            f"{len(self.data[DOMAINS])} domains and {len(self.data[HOSTING])} hosting accounts"
        )

    def query(self, statement: Select) -> List[Dict[str, Any]]:
        if not isinstance(statement, Select):
            raise QueryException(f"query() expects a Select, got {type(statement).__name__}")

        rows = [self._apply_joins(row, statement.joins) for row in self._table(statement.table)]
        rows = [row for row in rows if row is not None and self._matches(row, statement.filters)]

        if statement.count_only:
            return [{'count': len(rows)}]

        if statement.order_by:
            column = statement.order_by.column
            # None sorts first ascending, last descending
            rows.sort(key=lambda row: (row.get(column) is not None, row.get(column)),
                      reverse=statement.order_by.descending)

        if statement.limit is not None:
            rows = rows[statement.offset:statement.offset + statement.limit]
        elif statement.offset:
            rows = rows[statement.offset:]

        return rows

    def execute(self, statement) -> ExecuteResult:
        if isinstance(statement, Insert):
            return self._handle_insert(statement)
        if isinstance(statement, Update):
            return self._handle_update(statement)
        if isinstance(statement, Delete):
            return self._handle_delete(statement)
        if isinstance(statement, CreateTable):
            self.data.setdefault(statement.table, [])
            return ExecuteResult(changes=0)
        raise QueryException(f"execute() cannot run {type(statement).__name__}")

    def transaction(self, callback: Callable[[DatabaseConnection], T]) -> T:
        # No rollback: statements that ran before a failure stay applied
        return callback(self)

    def close(self) -> None:
        self.data.clear()

    def _table(self, table: str) -> List[Dict[str, Any]]:
        if table not in self.data:
            raise QueryException(f"Unknown table: {table}")
        return self.data[table]

    def _apply_joins(self, row: Dict[str, Any], joins: List[Join]) -> Optional[Dict[str, Any]]:
        result = dict(row)
        for join in joins:
            key = row.get(join.local_key)
            match = None
            if key is not None:
                match = next((other for other in self._table(join.table)
                              if other.get(join.foreign_key) == key), None)
            if match is None and join.required:
                return None
            for source, alias in join.columns.items():
                result[alias] = match.get(source) if match else None
        return result

    @staticmethod
    def _matches(row: Dict[str, Any], filters: List[Condition]) -> bool:
        return all(row.get(condition.column) == condition.value for condition in filters)

    def _handle_insert(self, statement: Insert) -> ExecuteResult:
        rows = self._table(statement.table)
        record = dict(statement.values)

        if statement.table in AUTO_INCREMENT_TABLES:
            self.last_id += 1
            record['id'] = self.last_id
        elif record.get('id') is None:
            raise QueryException(f"Insert into {statement.table} requires an id")
        elif any(row.get('id') == record['id'] for row in rows):
            raise QueryException(f"Duplicate id {record['id']} in {statement.table}")

        rows.append(record)
        return ExecuteResult(changes=1, last_insert_id=record['id'])

    def _handle_update(self, statement: Update) -> ExecuteResult:
        changes = 0
        for row in self._table(statement.table):
            if self._matches(row, statement.filters):
                row.update(statement.values)
                changes += 1
        return ExecuteResult(changes=changes)

    def _handle_delete(self, statement: Delete) -> ExecuteResult:
        rows = self._table(statement.table)
        kept = [row for row in rows if not self._matches(row, statement.filters)]
        changes = len(rows) - len(kept)
        self.data[statement.table] = kept
        return ExecuteResult(changes=changes)
