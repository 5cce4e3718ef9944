'''
QueryStub helps testing the SQL generated by repository methods. It calls a real
repository method while the database's query hook is temporarily replaced, so the
statement the method would send can be asserted on.

Only one interception may own the hook of a given Database at a time; a second one
started while the first is still running fails with HookInUse.
'''

import inspect
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, NamedTuple, Optional, Sequence

from connection.database import Database, QueryEvent
from interceptor.errors import (
    HookInUse,
    InvalidMethodFormat,
    NoQueryExecuted,
    UnknownMethod,
    UnknownRepository,
)


class MethodRef(NamedTuple):
    repo_name: str
    repo: Any
    method_name: str
    func: Callable


class ExecutionResult(NamedTuple):
    sql: str
    data: Any


@dataclass
class _Capture:
    sql: Optional[str] = None
    event: Optional[QueryEvent] = None

    def record(self, event: QueryEvent) -> bool:
        # first attempt wins
        if self.sql is not None:
            return False
        self.sql = event.query
        self.event = event
        return True


class _QueryCaptured(Exception):
    """Raised from inside the hook to stop the statement before it reaches the cursor."""


class QueryStub:
    def __init__(self, db: Database):
        self.db = db

    def resolve_method(self, method) -> MethodRef:
        """
        Resolves 'repoName.methodName' into the repository object and its bound method.
        """
        names = []
        if method and isinstance(method, str):
            names = method.split(".")
        if len(names) != 2 or not names[0] or not names[1]:
            raise InvalidMethodFormat(method)

        repo_name, method_name = names
        if repo_name not in self.db:
            raise UnknownRepository(repo_name)
        repo = self.db[repo_name]

        func = None
        if not method_name.startswith("_"):
            func = getattr(repo, method_name, None)
        if not callable(func):
            raise UnknownMethod(repo_name, method_name)

        return MethodRef(repo_name, repo, method_name, func)

    @contextmanager
    def _hook(self, hook: Callable[[QueryEvent], None]):
        opt = self.db.options
        if not self.db.hook_lock.acquire(blocking=False):
            raise HookInUse()
        old_query = opt.query
        opt.query = hook
        try:
            yield
        finally:
            opt.query = old_query
            self.db.hook_lock.release()

    async def _call(self, ref: MethodRef, params: Optional[Sequence[Any]]):
        result = ref.func(*(params or ()))
        if inspect.isawaitable(result):
            result = await result
        return result

    async def intercept(self, method: str, params: Optional[Sequence[Any]] = None) -> str:
        """
        Runs the method and returns the first SQL statement it attempted.
        Execution is stopped at that statement, so nothing reaches the database.

        Raises NoQueryExecuted when the method settles without issuing a query;
        any other error of the method is re-raised unchanged.
        """
        ref = self.resolve_method(method)
        capture = _Capture()

        def stop_at_first_query(e: QueryEvent):
            capture.record(e)
            raise _QueryCaptured()

        with self._hook(stop_at_first_query):
            try:
                data = await self._call(ref, params)
            except _QueryCaptured:
                data = None

        if capture.sql is None:
            raise NoQueryExecuted(method, data)
        print(f"[QueryStub] Intercepted {method}: {capture.sql}")
        return capture.sql

    async def execute(self, method: str, params: Optional[Sequence[Any]] = None) -> ExecutionResult:
        """
        Runs the method to completion and returns the first SQL statement it
        executed side-by-side with the data it returned.
        """
        ref = self.resolve_method(method)
        capture = _Capture()

        with self._hook(capture.record):
            data = await self._call(ref, params)

        if capture.sql is None:
            raise NoQueryExecuted(method, data)
        print(f"[QueryStub] Executed {method}: {capture.sql}")
        return ExecutionResult(capture.sql, data)
