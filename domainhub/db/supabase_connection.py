"""
Supabase Database Connection
Translates structured statements into PostgREST query-builder calls
"""

import logging
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Dict, List

from postgrest.exceptions import APIError
from supabase import Client, create_client

from domainhub.db.config import SupabaseConfig
from domainhub.db.connection import DatabaseConnection, ExecuteResult, T
from domainhub.db.statements import (
    CreateTable, Delete, Insert, Join, Select, Update,
)
from domainhub.utils.exceptions import BackendException, QueryException

logger = logging.getLogger(__name__)


def _json_safe(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def _select_columns(joins: List[Join]) -> str:
    """`*` plus one embedded resource per join, e.g. clients!inner(full_name, email)"""
    parts = ['*']
    for join in joins:
        relation = f"{join.table}!inner" if join.required else join.table
        parts.append(f"{relation}({', '.join(join.columns)})")
    return ', '.join(parts)


def _flatten(row: Dict[str, Any], joins: List[Join]) -> Dict[str, Any]:
    """Replace embedded relation objects with flat alias columns"""
    result = dict(row)
    for join in joins:
        related = result.pop(join.table, None)
        if isinstance(related, list):
            related = related[0] if related else None
        for source, alias in join.columns.items():
            result[alias] = related.get(source) if related else None
    return result


class SupabaseConnection(DatabaseConnection):
    """Hosted Postgres accessed through the supabase client library"""

    backend_name = 'supabase'

    def __init__(self, config: SupabaseConfig, client: Client = None,
                 service_client: Client = None):
        self.config = config
        try:
            self.client = client or create_client(config.url, config.anon_key)
            if service_client is not None:
                self.service_client = service_client
            elif config.service_role_key and client is None:
                self.service_client = create_client(config.url, config.service_role_key)
            else:
                self.service_client = self.client
        except Exception as e:
            logger.error(f"Error creating Supabase client: {e}")
            raise BackendException(f"Failed to create Supabase client: {e}")
        logger.info("Supabase client initialized successfully")

    def query(self, statement: Select) -> List[Dict[str, Any]]:
        if not isinstance(statement, Select):
            raise QueryException(f"query() expects a Select, got {type(statement).__name__}")

        try:
            columns = _select_columns(statement.joins)
            if statement.count_only:
                builder = self.client.table(statement.table).select(
                    columns, count='exact', head=True)
            else:
                builder = self.client.table(statement.table).select(columns)

            for condition in statement.filters:
                builder = builder.eq(condition.column, _json_safe(condition.value))

            if statement.count_only:
                response = builder.execute()
                return [{'count': response.count or 0}]

            if statement.order_by:
                builder = builder.order(statement.order_by.column,
                                        desc=statement.order_by.descending)

            if statement.limit is not None:
                builder = builder.range(statement.offset,
                                        statement.offset + statement.limit - 1)

            response = builder.execute()
        except APIError as e:
            logger.error(f"Supabase query on {statement.table} failed: {e.message}")
            raise BackendException(f"Supabase query failed: {e.message}")
        except Exception as e:
            logger.error(f"Supabase query on {statement.table} failed: {e}")
            raise BackendException(f"Supabase query failed: {e}")

        return [_flatten(row, statement.joins) for row in response.data or []]

    def execute(self, statement) -> ExecuteResult:
        if isinstance(statement, CreateTable):
            logger.info(f"Skipping CREATE TABLE {statement.table}; schema is managed by Supabase migrations")
            return ExecuteResult(changes=0)
        if not isinstance(statement, (Insert, Update, Delete)):
            raise QueryException(f"execute() cannot run {type(statement).__name__}")

        table = self.service_client.table(statement.table)
        try:
            if isinstance(statement, Insert):
                values = {k: _json_safe(v) for k, v in statement.values.items()}
                response = table.insert(values).execute()
            else:
                if isinstance(statement, Update):
                    values = {k: _json_safe(v) for k, v in statement.values.items()}
                    builder = table.update(values)
                else:
                    builder = table.delete()
                for condition in statement.filters:
                    builder = builder.eq(condition.column, _json_safe(condition.value))
                response = builder.execute()
        except APIError as e:
            logger.error(f"Supabase write on {statement.table} failed: {e.message}")
            raise BackendException(f"Supabase write failed: {e.message}")
        except Exception as e:
            logger.error(f"Supabase write on {statement.table} failed: {e}")
            raise BackendException(f"Supabase write failed: {e}")

        rows = response.data or []
        last_insert_id = rows[0].get('id') if isinstance(statement, Insert) and rows else None
        return ExecuteResult(changes=len(rows), last_insert_id=last_insert_id)

    def transaction(self, callback: Callable[[DatabaseConnection], T]) -> T:
        # PostgREST has no multi-statement transactions
        return callback(self)

    def close(self) -> None:
        # HTTP clients hold no open sessions to release
        pass
