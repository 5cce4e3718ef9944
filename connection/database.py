'''
Database is the handle that repositories run their SQL through. It owns a SQLAlchemy
engine, a registry of repositories (name -> repository object) and a mutable options
object whose "query" slot is called with every statement right before it is sent to
the DBAPI cursor. Test helpers swap that slot to observe or stop the statements.
'''

import asyncio
from dataclasses import dataclass
from threading import Lock
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy import event, text
from sqlalchemy.engine import Engine

from interceptor.query_parser import SQLTypeParser


@dataclass
class QueryEvent:
    query: str
    params: Any = None
    executemany: bool = False
    kind: str = "OTHER"


class QueryOptions:
    """
    Global, mutable configuration of a Database.
    query: None or a callable receiving a QueryEvent before each statement.
    """
    def __init__(self, query: Optional[Callable[[QueryEvent], None]] = None):
        self.query = query


class Database:
    def __init__(self, engine: Engine):
        self.engine = engine
        self.options = QueryOptions()
        self.parser = SQLTypeParser()
        # only one interception may own options.query at a time
        self.hook_lock = Lock()
        self._repositories: Dict[str, Any] = {}

        event.listen(engine, "before_cursor_execute", self._before_cursor_execute)

    def _before_cursor_execute(self, conn, cursor, statement, parameters, context, executemany):
        hook = self.options.query
        if hook is None:
            return
        hook(QueryEvent(
            query=statement,
            params=parameters,
            executemany=executemany,
            kind=self.parser.get_type(statement),
        ))

    # ----------------------
    # Repository registry
    # ----------------------
    def add_repository(self, name: str, repository_cls):
        if not isinstance(name, str) or not name.isidentifier():
            raise ValueError(f"Invalid repository name: {name!r}")
        if name in self._repositories:
            raise ValueError(f"Repository '{name}' is already registered")
        repo = repository_cls(self)
        self._repositories[name] = repo
        print(f"[Database] Registered repository '{name}' ({repository_cls.__name__})")
        return repo

    @property
    def repositories(self) -> Dict[str, Any]:
        return dict(self._repositories)

    def __contains__(self, name) -> bool:
        return name in self._repositories

    def __getitem__(self, name: str):
        return self._repositories[name]

    def __getattr__(self, name: str):
        repos = self.__dict__.get("_repositories", {})
        if name in repos:
            return repos[name]
        raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")

    # ----------------------
    # Query execution
    # ----------------------
    def format(self, sql: str, params: Optional[Dict[str, Any]] = None) -> str:
        """
        Renders :name placeholders as SQL literals using the engine's dialect,
        so the statement text reaching the cursor is complete.
        """
        if not params:
            return sql
        clause = text(sql).bindparams(**params)
        return str(clause.compile(dialect=self.engine.dialect, compile_kwargs={"literal_binds": True}))

    def _run_write(self, sql: str) -> int:
        with self.engine.begin() as conn:
            return conn.exec_driver_sql(sql).rowcount

    def _run_read(self, sql: str) -> List[Dict[str, Any]]:
        with self.engine.connect() as conn:
            return [dict(r) for r in conn.exec_driver_sql(sql).mappings().all()]

    async def execute(self, sql: str, params: Optional[Dict[str, Any]] = None) -> int:
        """Runs a statement inside a transaction and returns the affected row count."""
        return await asyncio.to_thread(self._run_write, self.format(sql, params))

    async def fetch_all(self, sql: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        return await asyncio.to_thread(self._run_read, self.format(sql, params))

    async def fetch_one(self, sql: str, params: Optional[Dict[str, Any]] = None) -> Optional[Dict[str, Any]]:
        rows = await self.fetch_all(sql, params)
        if len(rows) > 1:
            raise ValueError(f"Expected at most one row, got {len(rows)}")
        return rows[0] if rows else None

    async def fetch_scalar(self, sql: str, params: Optional[Dict[str, Any]] = None):
        row = await self.fetch_one(sql, params)
        if row is None:
            return None
        return next(iter(row.values()))

    def dispose(self):
        event.remove(self.engine, "before_cursor_execute", self._before_cursor_execute)
        self.engine.dispose()
        print("[Database] Engine disposed")
