# kino/api/v1/admin_comments.py

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session
from kino.database import get_db
from kino.schemas.admin import AdminCommentListResponse, CommentModeration, BulkCommentAction, BulkActionResponse
from kino.services.admin_comment_service import AdminCommentService
from kino.core.exceptions import BaseAppException, server_error

logger = logging.getLogger(__name__)

router = APIRouter()


def get_admin_comment_service(db: Session = Depends(get_db)) -> AdminCommentService:
    return AdminCommentService(db)


@router.get(
    "",
    response_model=AdminCommentListResponse,
    summary="댓글 관리 목록",
    description="내용, 작성자 이름, 이메일 검색과 승인 상태 필터를 지원합니다.",
)
async def list_comments(
    search: Optional[str] = Query(default=None, description="검색어"),
    status_filter: str = Query(default="all", alias="status", pattern="^(all|approved|pending)$"),
    sort_by: str = Query(default="created_at", pattern="^(created_at|updated_at|rating)$"),
    sort_order: str = Query(default="desc", pattern="^(asc|desc)$"),
    page: int = Query(default=1, ge=1),
    admin_comment_service: AdminCommentService = Depends(get_admin_comment_service),
):
    try:
        return await admin_comment_service.list_comments(search, status_filter, sort_by, sort_order, page)
    except Exception:
        raise server_error(logger, "댓글 관리 목록 조회 실패")


@router.patch("/{comment_id}/moderation", summary="댓글 승인/거부")
async def moderate_comment(
    moderation: CommentModeration,
    comment_id: int = Path(description="댓글 ID"),
    admin_comment_service: AdminCommentService = Depends(get_admin_comment_service),
):
    try:
        await admin_comment_service.moderate(comment_id, moderation.approve)
        return {"comment_id": comment_id, "is_approved": moderation.approve}
    except BaseAppException:
        raise
    except Exception:
        raise server_error(logger, "댓글 검토 실패")


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT, summary="댓글 삭제")
async def delete_comment(
    comment_id: int = Path(description="댓글 ID"),
    admin_comment_service: AdminCommentService = Depends(get_admin_comment_service),
):
    try:
        await admin_comment_service.delete_comment(comment_id)
    except BaseAppException:
        raise
    except Exception:
        raise server_error(logger, "댓글 삭제 실패")


@router.post("/bulk", response_model=BulkActionResponse, summary="댓글 일괄 처리")
async def bulk_action(
    action_data: BulkCommentAction,
    admin_comment_service: AdminCommentService = Depends(get_admin_comment_service),
):
    try:
        return await admin_comment_service.bulk_action(action_data.comment_ids, action_data.action)
    except Exception:
        raise server_error(logger, "댓글 일괄 처리 실패")
