"""Checks that the provisioned schema has every table the app reads."""

from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import AsyncConnection

from infrastructure.database.models import Base

REQUIRED_TABLES: tuple[str, ...] = tuple(sorted(Base.metadata.tables))


async def missing_tables(conn: AsyncConnection) -> list[str]:
    """Return the required tables absent from the connected database."""
    existing = await conn.run_sync(lambda sync_conn: set(inspect(sync_conn).get_table_names()))
    return [name for name in REQUIRED_TABLES if name not in existing]
