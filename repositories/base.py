class Repository:
    """
    Base class of repositories registered on a Database.
    Every public method is reachable as 'repoName.methodName'.
    """
    def __init__(self, db):
        self.db = db
