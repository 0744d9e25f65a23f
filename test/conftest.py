"""
Test Configuration

Environment setup MUST happen before any application import: settings and
the loguru sinks are built at import time.

Architecture:
- Unit tests (test/**/unit/): use cases with mocked collaborators
- API tests (test/**/api/): TestClient with the DI container overridden by
  in-memory repositories, no database needed
- Integration tests (test/**/integration/): SQLAlchemy repositories through
  SqlAlchemyUnitOfWork on a per-test SQLite engine
"""

import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)
    os.environ.setdefault('POSTGRES_DB', 'library_rental_test_db')
    os.environ.setdefault('DEPLOY_ENV', 'test')


_early_setup_test_environment()
