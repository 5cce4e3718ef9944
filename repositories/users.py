from typing import Any, Dict, List, Optional

from repositories.base import Repository


class UsersRepository(Repository):
    table = "users"

    async def create_table(self) -> None:
        await self.db.execute(
            "CREATE TABLE IF NOT EXISTS users (id INTEGER PRIMARY KEY, name VARCHAR(255) NOT NULL)"
        )

    async def add(self, name: str) -> Optional[Dict[str, Any]]:
        await self.db.execute("INSERT INTO users (name) VALUES (:name)", {"name": name})
        return await self.db.fetch_one(
            "SELECT * FROM users WHERE name = :name ORDER BY id DESC LIMIT 1", {"name": name}
        )

    async def find_by_id(self, user_id: int) -> Optional[Dict[str, Any]]:
        return await self.db.fetch_one("SELECT * FROM users WHERE id = :id", {"id": user_id})

    async def find_by_name(self, name: str) -> List[Dict[str, Any]]:
        return await self.db.fetch_all(
            "SELECT * FROM users WHERE name = :name ORDER BY id", {"name": name}
        )

    async def count(self) -> int:
        return await self.db.fetch_scalar("SELECT COUNT(*) AS c FROM users")

    async def rename(self, user_id: int, name: str) -> int:
        if not name or not name.strip():
            raise ValueError("User name must not be empty")
        return await self.db.execute(
            "UPDATE users SET name = :name WHERE id = :id", {"name": name.strip(), "id": user_id}
        )

    async def remove(self, user_id: int) -> int:
        return await self.db.execute("DELETE FROM users WHERE id = :id", {"id": user_id})

    async def all(self) -> List[Dict[str, Any]]:
        return await self.db.fetch_all("SELECT * FROM users ORDER BY id")
