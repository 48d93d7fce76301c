#!/usr/bin/env python3
"""
Database Reset Script

1. Drop & recreate the database
2. Run `alembic upgrade head` to create the latest schema

Seeding is separate: `python -m script.seed_data`
"""

import asyncio
import subprocess

from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine

from src.platform.config.core_setting import settings
from src.platform.constant.path import BASE_DIR
from src.platform.logging.loguru_io import Logger


def _parse_db_connection(database_url: str) -> tuple[str, str]:
    """(server_url, db_name) from a database URL"""
    server_url, db_name = database_url.rsplit('/', 1)
    return server_url, db_name


async def _drop_and_create_db(server_url: str, db_name: str) -> None:
    admin_engine = create_async_engine(f'{server_url}/postgres', isolation_level='AUTOCOMMIT')
    try:
        async with admin_engine.connect() as conn:
            await conn.execute(
                text(
                    'SELECT pg_terminate_backend(pid) FROM pg_stat_activity '
                    'WHERE datname = :db_name AND pid <> pg_backend_pid()'
                ),
                {'db_name': db_name},
            )
            await conn.execute(text(f'DROP DATABASE IF EXISTS "{db_name}"'))
            Logger.base.info(f"🗑️ Database '{db_name}' dropped")
            await conn.execute(text(f'CREATE DATABASE "{db_name}"'))
            Logger.base.info(f"🏗️ Database '{db_name}' created")
    finally:
        await admin_engine.dispose()


def _run_alembic_migrations() -> None:
    Logger.base.info("🔄 Running 'alembic upgrade head'...")
    result = subprocess.run(
        ['alembic', 'upgrade', 'head'],
        cwd=BASE_DIR,
        capture_output=True,
        text=True,
    )
    if result.returncode != 0:
        Logger.base.error(f'❌ Migration failed:\n{result.stdout}\n{result.stderr}')
        raise RuntimeError(f'Alembic migration failed with return code {result.returncode}')

    Logger.base.info('✅ Database migrations completed')


async def main() -> None:
    server_url, db_name = _parse_db_connection(settings.DATABASE_URL_ASYNC)
    await _drop_and_create_db(server_url, db_name)
    _run_alembic_migrations()
    Logger.base.info('✅ Database reset completed')


if __name__ == '__main__':
    asyncio.run(main())
