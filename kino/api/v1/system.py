# kino/api/v1/system.py

import logging
from fastapi import APIRouter, HTTPException
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from kino.core.config import get_settings
from kino.database import engine

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
def health_check():
    """서비스 헬스체크"""
    return {"status": "healthy", "service": get_settings().app_name}


@router.get("/db-test")
def test_db():
    """데이터베이스 연결 테스트"""
    try:
        with engine.connect() as connection:
            result = connection.execute(text("SELECT 1"))
            return {"status": "Ma'lumotlar bazasi ulanishi muvaffaqiyatli", "result": result.fetchone()[0]}
    except SQLAlchemyError as e:
        logger.error("DB 연결 실패: %s", e)
        raise HTTPException(status_code=500, detail="Ma'lumotlar bazasiga ulanib bo'lmadi")
