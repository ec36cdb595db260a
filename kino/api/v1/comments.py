# kino/api/v1/comments.py

import logging
from fastapi import APIRouter, Path, Depends, status
from sqlalchemy.orm import Session
from kino.database import get_db
from kino.schemas.comment import Comment, CommentUpdate
from kino.schemas.profile import Profile
from kino.services.comment_service import CommentService
from kino.core.dependencies import get_current_user
from kino.core.exceptions import BaseAppException, server_error

logger = logging.getLogger(__name__)

router = APIRouter()


def get_comment_service(db: Session = Depends(get_db)) -> CommentService:
    return CommentService(db)


@router.put(
    "/{comment_id}",
    response_model=Comment,
    summary="댓글 수정",
    description="본인이 작성한 댓글만 수정할 수 있습니다.",
)
async def update_comment(
    comment_data: CommentUpdate,
    comment_id: int = Path(description="댓글 ID"),
    current_user: Profile = Depends(get_current_user),
    comment_service: CommentService = Depends(get_comment_service),
):
    try:
        return await comment_service.update_comment(comment_id, current_user.id, comment_data)
    except BaseAppException:
        raise
    except Exception:
        raise server_error(logger, "댓글 수정 실패")


@router.delete(
    "/{comment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="댓글 삭제",
    description="본인이 작성한 댓글과 그 답글을 삭제합니다.",
)
async def delete_comment(
    comment_id: int = Path(description="댓글 ID"),
    current_user: Profile = Depends(get_current_user),
    comment_service: CommentService = Depends(get_comment_service),
):
    try:
        await comment_service.delete_comment(comment_id, current_user.id)
    except BaseAppException:
        raise
    except Exception:
        raise server_error(logger, "댓글 삭제 실패")
