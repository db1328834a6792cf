"""
Главный модуль FastAPI приложения Storefront Catalog API.

Содержит конфигурацию приложения, логирования, middleware и роутеры.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront.api.v1.routers import api_router
from storefront.core.config import settings

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Создание экземпляра FastAPI приложения
app = FastAPI(
    title="Storefront Catalog API",
    description="API каталога: фильтрация товаров, карточка товара и выбор варианта",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Настройка CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/healthz")
def healthz():
    """
    Health check endpoint для мониторинга состояния приложения.

    Returns:
        dict: Статус приложения и версия
    """
    return {"status": "ok", "service": "Storefront Catalog API", "version": "1.0.0"}


# Подключение API роутеров
app.include_router(api_router, prefix="/api/v1")
