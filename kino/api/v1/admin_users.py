# kino/api/v1/admin_users.py

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Path, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session
from kino.database import get_db
from kino.schemas.admin import AdminUser, AdminUserListResponse, RoleUpdate, BulkUserAction, BulkActionResponse
from kino.schemas.profile import Profile
from kino.services.admin_user_service import AdminUserService
from kino.core.dependencies import get_current_admin
from kino.core.exceptions import BaseAppException, server_error

logger = logging.getLogger(__name__)

router = APIRouter()


def get_admin_user_service(db: Session = Depends(get_db)) -> AdminUserService:
    return AdminUserService(db)


@router.get(
    "",
    response_model=AdminUserListResponse,
    summary="사용자 관리 목록",
    description="이메일/이름 검색, 권한 필터, 정렬, 페이지(20명) 단위로 조회합니다.",
)
async def list_users(
    search: Optional[str] = Query(default=None, description="이메일/이름 검색어"),
    role: str = Query(default="all", pattern="^(all|user|admin)$", description="권한 필터"),
    sort_by: str = Query(default="created_at", pattern="^(created_at|email|full_name|role)$"),
    sort_order: str = Query(default="desc", pattern="^(asc|desc)$"),
    page: int = Query(default=1, ge=1),
    admin_user_service: AdminUserService = Depends(get_admin_user_service),
):
    try:
        return await admin_user_service.list_users(search, role, sort_by, sort_order, page)
    except Exception:
        raise server_error(logger, "사용자 관리 목록 조회 실패")


@router.get(
    "/export",
    summary="사용자 CSV 내보내기",
    response_class=Response,
)
async def export_users(admin_user_service: AdminUserService = Depends(get_admin_user_service)):
    try:
        content = await admin_user_service.export_csv()
    except Exception:
        raise server_error(logger, "사용자 내보내기 실패")
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="users.csv"'},
    )


@router.patch("/{user_id}/role", response_model=AdminUser, summary="사용자 권한 변경")
async def set_role(
    role_data: RoleUpdate,
    user_id: int = Path(description="사용자 ID"),
    current_admin: Profile = Depends(get_current_admin),
    admin_user_service: AdminUserService = Depends(get_admin_user_service),
):
    try:
        return await admin_user_service.set_role(user_id, role_data.role, current_admin.id)
    except BaseAppException:
        raise
    except Exception:
        raise server_error(logger, "사용자 권한 변경 실패")


@router.post(
    "/bulk",
    response_model=BulkActionResponse,
    summary="사용자 일괄 처리",
    description="promote (관리자 지정), demote (일반 사용자), delete (삭제)",
)
async def bulk_action(
    action_data: BulkUserAction,
    current_admin: Profile = Depends(get_current_admin),
    admin_user_service: AdminUserService = Depends(get_admin_user_service),
):
    try:
        return await admin_user_service.bulk_action(action_data.user_ids, action_data.action, current_admin.id)
    except BaseAppException:
        raise
    except Exception:
        raise server_error(logger, "사용자 일괄 처리 실패")
