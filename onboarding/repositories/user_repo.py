from typing import Optional
from asyncpg import Connection, UniqueViolationError

from onboarding.core.exceptions import DuplicateKeyError


class UserRepository:

    def __init__(self, conn: Connection):
        self.conn = conn

    async def get_by_id(self, user_id: int) -> Optional[dict]:
        sql = "SELECT * FROM users WHERE id = $1;"
        record = await self.conn.fetchrow(sql, user_id)
        return dict(record) if record else None

    async def get_by_email(self, email: str) -> Optional[dict]:
        sql = "SELECT * FROM users WHERE lower(email) = lower($1);"
        record = await self.conn.fetchrow(sql, email)
        return dict(record) if record else None

    async def list_all(self) -> list[dict]:
        sql = "SELECT * FROM users ORDER BY created_at DESC, id DESC;"
        records = await self.conn.fetch(sql)
        return [dict(r) for r in records]

    async def create(self, user_in: dict) -> dict:
        sql = """
            INSERT INTO users (name, email, first_name, middle_name, last_name,
                               national_id, phone, address, role, hashed_password)
            VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10)
            RETURNING *;
        """
        try:
            record = await self.conn.fetchrow(
                sql,
                user_in["name"],
                user_in["email"],
                user_in["first_name"],
                user_in.get("middle_name"),
                user_in["last_name"],
                user_in.get("national_id"),
                user_in.get("phone"),
                user_in.get("address"),
                user_in["role"],
                user_in["hashed_password"],
            )
        except UniqueViolationError:
            raise DuplicateKeyError(f"User with email {user_in['email']} already exists.")
        return dict(record)

    async def update_role(self, user_id: int, role: str) -> Optional[dict]:
        sql = "UPDATE users SET role = $1, updated_at = now() WHERE id = $2 RETURNING *;"
        record = await self.conn.fetchrow(sql, role, user_id)
        return dict(record) if record else None

    async def update_password(self, user_id: int, hashed_password: str) -> Optional[dict]:
        sql = "UPDATE users SET hashed_password = $1, updated_at = now() WHERE id = $2 RETURNING *;"
        record = await self.conn.fetchrow(sql, hashed_password, user_id)
        return dict(record) if record else None

    async def delete(self, user_id: int) -> bool:
        sql = "DELETE FROM users WHERE id = $1 RETURNING id;"
        deleted = await self.conn.fetchval(sql, user_id)
        return deleted is not None
