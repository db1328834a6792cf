"""
Базовый класс для всех моделей SQLAlchemy.

Использует Declarative API SQLAlchemy 2.0.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy.orm import DeclarativeBase


def new_uuid() -> str:
    """Сгенерировать строковый UUID для первичного ключа."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    """Текущее время в UTC без tzinfo (колонки хранятся как naive UTC)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Base(DeclarativeBase):
    """
    Базовый класс для всех моделей.

    Наследуется от DeclarativeBase для использования нового API SQLAlchemy 2.0.
    """
    pass
