"""
Database Connection Contract
The narrow interface every storage backend implements
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, TypeVar, Union

from domainhub.db.statements import Select, Insert, Update, Delete, CreateTable

T = TypeVar('T')

Statement = Union[Insert, Update, Delete, CreateTable]

@dataclass
class ExecuteResult:
    """Outcome of a write: matched row count and the generated id, if any"""
    changes: int = 0
    last_insert_id: Optional[Union[int, str]] = None

class DatabaseConnection(ABC):
    """Backend-agnostic connection used by repositories and the manager"""

    backend_name = 'unknown'

    @abstractmethod
    def query(self, statement: Select) -> List[Dict[str, Any]]:
        """Run a read-only Select and return its rows"""

    def query_one(self, statement: Select) -> Optional[Dict[str, Any]]:
        """First row of the Select, or None when nothing matched"""
        rows = self.query(statement)
        return rows[0] if rows else None

    @abstractmethod
    def execute(self, statement: Statement) -> ExecuteResult:
        """Run a write or DDL statement; changes is the true match count"""

    @abstractmethod
    def transaction(self, callback: Callable[['DatabaseConnection'], T]) -> T:
        """Run callback with a connection handle and return its result"""

    @abstractmethod
    def close(self) -> None:
        """Release backend resources; safe to call more than once"""
