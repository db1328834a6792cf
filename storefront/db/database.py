"""
Конфигурация базы данных.

Движок SQLAlchemy и фабрика сессий каталога. Основная БД: PostgreSQL,
SQLite поддерживается для локального запуска и тестов.
"""

from typing import Any, Dict, Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from storefront.core.config import settings


def engine_options(url: str) -> Dict[str, Any]:
    """Параметры create_engine в зависимости от диалекта."""
    options: Dict[str, Any] = {"echo": bool(settings.DEBUG)}
    if url.startswith("sqlite"):
        # Сессии FastAPI живут в пуле потоков
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["pool_pre_ping"] = True
    return options


engine = create_engine(settings.DATABASE_URL, **engine_options(settings.DATABASE_URL))

# Каталог только читает данные, автофлаш не нужен
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency: сессия БД на время запроса.

    Yields:
        Session: Сессия SQLAlchemy, закрываемая после ответа
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
