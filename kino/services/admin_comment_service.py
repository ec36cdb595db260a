# kino/services/admin_comment_service.py

import logging
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session, aliased
from sqlalchemy import select, func, or_, update
from kino.models import CommentModel, ProfileModel, MovieModel
from kino.schemas.admin import (
    AdminComment,
    AdminCommentAuthor,
    AdminCommentMovie,
    AdminCommentListResponse,
    BulkActionResponse,
)
from kino.services.comment_service import CommentService
from kino.services.movie_service import total_pages_for
from kino.core.exceptions import NotFoundException

logger = logging.getLogger(__name__)

COMMENTS_PER_PAGE = 20
COMMENT_SORT_COLUMNS = {
    "created_at": CommentModel.created_at,
    "updated_at": CommentModel.updated_at,
    "rating": CommentModel.rating,
}


class AdminCommentService:

    def __init__(self, db: Session):
        self.db = db

    async def list_comments(
        self,
        search: Optional[str] = None,
        status: str = "all",
        sort_by: str = "created_at",
        sort_order: str = "desc",
        page: int = 1,
    ) -> AdminCommentListResponse:
        """댓글 목록 (작성자, 영화, 답글 수 포함)"""
        conditions = []
        if status == "approved":
            conditions.append(CommentModel.is_approved.is_(True))
        elif status == "pending":
            conditions.append(CommentModel.is_approved.is_(False))

        term = (search or "").strip().lower()
        if term:
            pattern = f"%{term}%"
            conditions.append(
                or_(
                    func.lower(CommentModel.content).like(pattern),
                    func.lower(ProfileModel.full_name).like(pattern),
                    func.lower(ProfileModel.email).like(pattern),
                )
            )

        base = (
            select(CommentModel.id)
            .outerjoin(ProfileModel, CommentModel.user_id == ProfileModel.id)
            .where(*conditions)
        )
        total = self.db.scalar(select(func.count()).select_from(base.subquery())) or 0

        replies = aliased(CommentModel)
        replies_count = (
            select(func.count(replies.id))
            .where(replies.parent_id == CommentModel.id)
            .correlate(CommentModel)
            .scalar_subquery()
        )

        column = COMMENT_SORT_COLUMNS.get(sort_by, CommentModel.created_at)
        ordering = column.asc() if sort_order == "asc" else column.desc()
        tie_breaker = CommentModel.id.asc() if sort_order == "asc" else CommentModel.id.desc()

        page = max(page, 1)
        stmt = (
            select(CommentModel, ProfileModel, MovieModel, replies_count.label("replies_count"))
            .outerjoin(ProfileModel, CommentModel.user_id == ProfileModel.id)
            .outerjoin(MovieModel, CommentModel.movie_id == MovieModel.id)
            .where(*conditions)
            .order_by(ordering, tie_breaker)
            .offset((page - 1) * COMMENTS_PER_PAGE)
            .limit(COMMENTS_PER_PAGE)
        )

        comments = []
        for comment, author, movie, count in self.db.execute(stmt).all():
            comments.append(
                AdminComment(
                    id=comment.id,
                    movie_id=comment.movie_id,
                    user_id=comment.user_id,
                    content=comment.content,
                    rating=comment.rating,
                    parent_id=comment.parent_id,
                    is_approved=comment.is_approved,
                    created_at=comment.created_at,
                    updated_at=comment.updated_at,
                    profiles=AdminCommentAuthor(
                        id=author.id, full_name=author.full_name, email=author.email, avatar_url=author.avatar_url
                    ) if author else None,
                    movies=AdminCommentMovie(id=movie.id, title=movie.title, title_uz=movie.title_uz) if movie else None,
                    replies_count=count or 0,
                )
            )

        return AdminCommentListResponse(
            comments=comments,
            total=total,
            page=page,
            total_pages=total_pages_for(total, COMMENTS_PER_PAGE),
        )

    async def moderate(self, comment_id: int, approve: bool) -> None:
        comment_model = self.db.get(CommentModel, comment_id)
        if comment_model is None:
            raise NotFoundException("Izoh topilmadi")
        comment_model.is_approved = approve
        comment_model.updated_at = datetime.utcnow()
        self.db.commit()
        logger.info("댓글 검토: comment_id=%s approve=%s", comment_id, approve)

    async def delete_comment(self, comment_id: int) -> None:
        if self.db.get(CommentModel, comment_id) is None:
            raise NotFoundException("Izoh topilmadi")
        CommentService(self.db).delete_with_replies([comment_id])
        self.db.commit()

    async def bulk_action(self, comment_ids: List[int], action: str) -> BulkActionResponse:
        comment_ids = list(dict.fromkeys(comment_ids))
        if action == "delete":
            affected = CommentService(self.db).delete_with_replies(comment_ids)
            message = f"{affected} ta izoh o'chirildi"
        else:
            result = self.db.execute(
                update(CommentModel)
                .where(CommentModel.id.in_(comment_ids))
                .values(is_approved=(action == "approve"), updated_at=datetime.utcnow())
            )
            affected = result.rowcount
            message = f"{affected} ta izoh {'tasdiqlandi' if action == 'approve' else 'rad etildi'}"

        self.db.commit()
        logger.info("댓글 일괄 처리: action=%s affected=%s", action, affected)
        return BulkActionResponse(action=action, affected=affected, message=message)
