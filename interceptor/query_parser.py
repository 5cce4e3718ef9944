import re

class SQLTypeParser:

    DML_COMMANDS = ("insert", "update", "delete")
    DDL_COMMANDS = ("create", "alter", "drop", "rename", "truncate")
    TX_COMMANDS = ("begin", "commit", "rollback", "savepoint", "release")
    ADMIN_COMMANDS = ("set", "use", "pragma")
    PROC_COMMANDS = ("call", "exec")

    def _clean_sql(self, sql: str) -> str:
        """
        Strips SQL comments and surrounding whitespace, lowercases the rest.
        """
        sql = re.sub(r'--.*?$', '', sql, flags=re.MULTILINE)
        sql = re.sub(r'/\*.*?\*/', '', sql, flags=re.DOTALL)
        return sql.strip().lower()

    def get_type(self, sql: str) -> str:
        """
        Returns the statement type as a string:
        SELECT / DML / UPSERT / MERGE / DDL / TX / ADMIN / PROCEDURE / MULTI / OTHER
        """
        if not sql or not isinstance(sql, str):
            return "OTHER"

        clean = self._clean_sql(sql)
        if not clean:
            return "OTHER"

        if ";" in clean.strip(";"):
            return "MULTI"

        first = clean.split()[0]
        if first in ("select", "with"):
            return "SELECT"
        if first == "insert" and "on conflict" in clean:
            return "UPSERT"
        if first in self.DML_COMMANDS:
            return "DML"
        if first == "merge":
            return "MERGE"
        if first in self.DDL_COMMANDS:
            return "DDL"
        if first in self.TX_COMMANDS:
            return "TX"
        if first in self.PROC_COMMANDS:
            return "PROCEDURE"
        if first in self.ADMIN_COMMANDS:
            return "ADMIN"

        return "OTHER"
