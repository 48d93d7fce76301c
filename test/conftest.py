"""
Test Configuration

Environment setup MUST happen before any application import: settings and
the loguru file sink read it at import time.

- Unit tests (test/**/unit/): in-memory ledgers, no database
- API tests: FastAPI TestClient with use cases overridden by unit-level fakes
"""

import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    worker_id = os.environ.get('PYTEST_XDIST_WORKER', 'master')
    if worker_id == 'master':
        os.environ['POSTGRES_DB'] = 'rso_events_test_db'
    else:
        os.environ['POSTGRES_DB'] = f'rso_events_test_db_{worker_id}'

    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ.setdefault('DB_POOL_SIZE', '2')
    os.environ.setdefault('DB_POOL_MAX_OVERFLOW', '2')


_early_setup_test_environment()
