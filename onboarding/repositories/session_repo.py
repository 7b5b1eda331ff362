from datetime import datetime
from typing import Optional
from asyncpg import Connection


class SessionRepository:
    """Server-side rows backing issued session tokens."""

    def __init__(self, conn: Connection):
        self.conn = conn

    async def create(
        self,
        session_id: str,
        user_id: int,
        created_at: datetime,
        expires_at: datetime,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> dict:
        sql = """
            INSERT INTO sessions (id, user_id, created_at, expires_at, ip_address, user_agent)
            VALUES ($1, $2, $3, $4, $5, $6)
            RETURNING *;
        """
        record = await self.conn.fetchrow(
            sql, session_id, user_id, created_at, expires_at, ip_address, user_agent
        )
        return dict(record)

    async def get(self, session_id: str) -> Optional[dict]:
        sql = "SELECT * FROM sessions WHERE id = $1;"
        record = await self.conn.fetchrow(sql, session_id)
        return dict(record) if record else None

    async def delete(self, session_id: str) -> None:
        await self.conn.execute("DELETE FROM sessions WHERE id = $1;", session_id)
