from __future__ import annotations

import io
from collections.abc import Generator

import pytest
from PIL import Image
from sqlalchemy import Engine, StaticPool
from sqlmodel import Session, create_engine

from src.catalog.core.services import DbManageService, DbSessionService
from src.catalog.runtime.config.config_data import ConfigData

__all__ = [
    "config_data",
    "database_service",
    "engine",
    "png_bytes",
    "session",
    "make_image_bytes",
]


def make_image_bytes(fmt: str = "JPEG", size: tuple[int, int] = (4, 3), color="red") -> bytes:
    """Encode a tiny solid-color image with Pillow."""
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def config_data() -> ConfigData:
    return ConfigData()


@pytest.fixture
def engine() -> Generator[Engine]:
    """A fresh in-memory database per test."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def database_service(engine: Engine) -> DbSessionService:
    """DbSessionService bound to the test engine, with every table created.

    The service is built before the schema so its SQLite foreign-key pragma
    applies to the shared connection.
    """
    service = DbSessionService(engine=engine)
    DbManageService(engine).create_all()
    return service


@pytest.fixture
def session(database_service: DbSessionService) -> Generator[Session]:
    """Create a fresh database session for repository tests."""
    session = database_service.get_session()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def png_bytes() -> bytes:
    return make_image_bytes("PNG")
