# kino/api/v1/admin_dashboard.py

import logging
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from kino.database import get_db
from kino.schemas.admin import DashboardStats, RecentActivity, DashboardCharts
from kino.services.dashboard_service import DashboardService
from kino.core.exceptions import server_error

logger = logging.getLogger(__name__)

router = APIRouter()


def get_dashboard_service(db: Session = Depends(get_db)) -> DashboardService:
    return DashboardService(db)


@router.get(
    "/stats",
    response_model=DashboardStats,
    summary="대시보드 통계",
    description="영화, 사용자, 댓글, 조회수, 평균 평점 등 전체 통계를 조회합니다.",
)
async def get_stats(dashboard_service: DashboardService = Depends(get_dashboard_service)):
    try:
        return await dashboard_service.get_stats()
    except Exception:
        raise server_error(logger, "대시보드 통계 조회 실패")


@router.get(
    "/activity",
    response_model=List[RecentActivity],
    summary="최근 활동",
    description="최근 영화, 가입자, 댓글, 평점 각 5건을 최신순으로 합쳐서 반환합니다.",
)
async def get_recent_activity(dashboard_service: DashboardService = Depends(get_dashboard_service)):
    try:
        return await dashboard_service.get_recent_activity()
    except Exception:
        raise server_error(logger, "최근 활동 조회 실패")


@router.get("/charts", response_model=DashboardCharts, summary="대시보드 차트")
async def get_charts(dashboard_service: DashboardService = Depends(get_dashboard_service)):
    try:
        return await dashboard_service.get_charts()
    except Exception:
        raise server_error(logger, "차트 데이터 조회 실패")
