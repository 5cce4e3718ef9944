import json


class InterceptorError(Exception):
    """Base class for everything QueryStub raises on its own behalf."""


class InvalidMethodFormat(InterceptorError, TypeError):
    def __init__(self, method=None):
        self.method = method
        super().__init__('Parameter "method" must have format "repoName.methodName".')


class UnknownRepository(InterceptorError, LookupError):
    def __init__(self, repo_name: str):
        self.repo_name = repo_name
        super().__init__(f'Repository with name "{repo_name}" does not exist.')


class UnknownMethod(InterceptorError, LookupError):
    def __init__(self, repo_name: str, method_name: str):
        self.repo_name = repo_name
        self.method_name = method_name
        super().__init__(
            f'Method with name "{method_name}" does not exist in repository "{repo_name}".'
        )


class NoQueryExecuted(InterceptorError):
    """The method under test settled without ever reaching the query hook."""

    def __init__(self, method: str, data=None):
        self.method = method
        self.data = data
        super().__init__(
            f"Method '{method}' resolved without trying to execute any query, "
            f"with data: {json.dumps(data, default=str)}"
        )


class HookInUse(InterceptorError, RuntimeError):
    def __init__(self):
        super().__init__(
            "The query hook of this database is already owned by another interception"
        )
