"""
Database Connection Utilities
asyncpg pool shared by every route group
"""

import json
from contextlib import asynccontextmanager
from typing import Optional

import asyncpg
import structlog
from asyncpg import Connection, Pool

from linkedin_api.config import Settings
from linkedin_api.db.schema import SCHEMA_STATEMENTS

logger = structlog.get_logger(__name__)


async def _init_connection(conn: Connection) -> None:
    """Decode json/jsonb columns into Python objects"""
    for type_name in ("json", "jsonb"):
        await conn.set_type_codec(
            type_name,
            encoder=json.dumps,
            decoder=json.loads,
            schema="pg_catalog",
        )


class Database:
    """Async PostgreSQL connection pool"""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.pool: Optional[Pool] = None

    async def connect(self):
        """Create the pool, test it and apply the schema"""
        try:
            self.pool = await asyncpg.create_pool(
                dsn=self.settings.dsn,
                min_size=self.settings.db_pool_min_size,
                max_size=self.settings.db_pool_max_size,
                command_timeout=self.settings.db_command_timeout,
                init=_init_connection,
            )

            async with self.pool.acquire() as conn:
                result = await conn.fetchval("SELECT 1")
                if result != 1:
                    raise RuntimeError("Database health check failed")

                async with conn.transaction():
                    for statement in SCHEMA_STATEMENTS:
                        await conn.execute(statement)

            logger.info(
                "Database connected",
                min_size=self.settings.db_pool_min_size,
                max_size=self.settings.db_pool_max_size,
            )
        except Exception as e:
            logger.error("Failed to connect to database", error=str(e))
            if self.pool:
                await self.pool.close()
                self.pool = None
            raise

    async def close(self):
        """Close connection pool gracefully"""
        if self.pool:
            await self.pool.close()
            self.pool = None
            logger.info("Database pool closed")

    def get_pool(self) -> Pool:
        if self.pool is None:
            raise RuntimeError("Database pool not initialized")
        return self.pool

    @asynccontextmanager
    async def transaction(self):
        """Acquire a connection and run the block inside a transaction"""
        async with self.get_pool().acquire() as conn:
            async with conn.transaction():
                yield conn

    async def fetch(self, query: str, *args):
        """Execute a query and return all rows as dicts"""
        rows = await self.get_pool().fetch(query, *args)
        return [dict(row) for row in rows]

    async def fetchrow(self, query: str, *args):
        """Execute a query and return the first row as a dict, or None"""
        row = await self.get_pool().fetchrow(query, *args)
        return dict(row) if row else None

    async def fetchval(self, query: str, *args):
        """Execute a query and return a single value"""
        return await self.get_pool().fetchval(query, *args)

    async def execute(self, query: str, *args) -> str:
        """Execute a command (INSERT, UPDATE, DELETE)"""
        return await self.get_pool().execute(query, *args)
