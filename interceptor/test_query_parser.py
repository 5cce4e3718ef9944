import pytest

from interceptor.query_parser import SQLTypeParser


@pytest.mark.parametrize(
    "sql, expected",
    [
        ("SELECT * FROM users WHERE id = 42", "SELECT"),
        ("  with t as (select 1) select * from t", "SELECT"),
        ("INSERT INTO users (name) VALUES ('Alice')", "DML"),
        ("INSERT INTO users (id) VALUES (1) ON CONFLICT DO NOTHING", "UPSERT"),
        ("DELETE FROM users WHERE id = 1", "DML"),
        ("CREATE TABLE users (id INTEGER)", "DDL"),
        ("TRUNCATE users", "DDL"),
        ("BEGIN", "TX"),
        ("PRAGMA foreign_keys = ON", "ADMIN"),
        ("CALL refresh_stats()", "PROCEDURE"),
        ("SELECT 1; SELECT 2", "MULTI"),
        ("SELECT 1;", "SELECT"),
        ("-- lookup\nSELECT 1", "SELECT"),
        ("/* note */ UPDATE users SET name = 'x'", "DML"),
        ("VACUUM", "OTHER"),
        ("", "OTHER"),
        ("-- only a comment", "OTHER"),
        (None, "OTHER"),
    ],
)
def test_get_type(sql, expected):
    assert SQLTypeParser().get_type(sql) == expected
