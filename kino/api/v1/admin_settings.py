# kino/api/v1/admin_settings.py

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from kino.database import get_db
from kino.schemas.settings import SiteSettings, SiteSettingsUpdate, SystemStats
from kino.services.settings_service import SettingsService
from kino.core.exceptions import server_error

logger = logging.getLogger(__name__)

router = APIRouter()


def get_settings_service(db: Session = Depends(get_db)) -> SettingsService:
    return SettingsService(db)


@router.get("", response_model=SiteSettings, summary="사이트 설정 조회")
async def get_site_settings(settings_service: SettingsService = Depends(get_settings_service)):
    try:
        return await settings_service.get_site_settings()
    except Exception:
        raise server_error(logger, "사이트 설정 조회 실패")


@router.put("", response_model=SiteSettings, summary="사이트 설정 수정")
async def update_site_settings(
    update_data: SiteSettingsUpdate,
    settings_service: SettingsService = Depends(get_settings_service),
):
    try:
        return await settings_service.update_site_settings(update_data)
    except Exception:
        raise server_error(logger, "사이트 설정 수정 실패")


@router.get("/system-stats", response_model=SystemStats, summary="시스템 통계")
async def get_system_stats(settings_service: SettingsService = Depends(get_settings_service)):
    try:
        return await settings_service.get_system_stats()
    except Exception:
        raise server_error(logger, "시스템 통계 조회 실패")


@router.get(
    "/export",
    summary="전체 데이터 내보내기",
    description="영화, 사용자, 댓글, 장르, 태그 데이터를 JSON 으로 내보냅니다.",
)
async def export_site_data(settings_service: SettingsService = Depends(get_settings_service)):
    try:
        return await settings_service.export_site_data()
    except Exception:
        raise server_error(logger, "데이터 내보내기 실패")
