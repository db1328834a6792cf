"""
API endpoints для вариантов фильтров каталога.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.db.database import get_db
from storefront.schemas.catalog import ProductFilters
from storefront.schemas.filters import FilterOptionsOut
from storefront.services.filter_options import get_filter_options

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=FilterOptionsOut)
def list_filter_options(
    search: Optional[str] = Query(None, description="Поисковый запрос каталога"),
    db: Session = Depends(get_db),
):
    """
    Получить варианты фильтров со счетчиками товаров.

    Значения с нулевым счетчиком возвращаются с disabled=true.
    """
    filters = ProductFilters(search=(search or "").strip() or None)
    try:
        return get_filter_options(db, filters)
    except SQLAlchemyError:
        logger.exception("Failed to load filter options")
        raise HTTPException(500, detail="Failed to load filter options")
