import os

# Before anything reads config.yaml: no log file, no on-disk database
os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("LOG_FILE", "")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from tests.fixtures import *  # noqa: E402,F401,F403
