# kino/services/comment_service.py

import logging
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import select, delete
from kino.models import CommentModel, ProfileModel, MovieModel, MovieStatus
from kino.schemas.comment import Comment, CommentCreate, CommentUpdate
from kino.schemas.profile import ProfileAuthor
from kino.services.settings_service import SettingsService
from kino.core.exceptions import NotFoundException, ValidationException, PermissionDeniedException

logger = logging.getLogger(__name__)


class CommentService:

    def __init__(self, db: Session):
        self.db = db

    def _build_comment_response(self, comment_model: CommentModel, author: Optional[ProfileModel]) -> Comment:
        return Comment(
            id=comment_model.id,
            movie_id=comment_model.movie_id,
            user_id=comment_model.user_id,
            content=comment_model.content,
            rating=comment_model.rating,
            parent_id=comment_model.parent_id,
            is_approved=comment_model.is_approved,
            created_at=comment_model.created_at,
            updated_at=comment_model.updated_at,
            profiles=ProfileAuthor.model_validate(author) if author else None,
        )

    def _get_comment_model(self, comment_id: int) -> CommentModel:
        comment_model = self.db.get(CommentModel, comment_id)
        if comment_model is None:
            raise NotFoundException("Izoh topilmadi")
        return comment_model

    def _ensure_movie(self, movie_id: int) -> None:
        movie_model = self.db.get(MovieModel, movie_id)
        if movie_model is None or movie_model.status != MovieStatus.active:
            raise NotFoundException("Kino topilmadi")

    async def get_movie_comments(self, movie_id: int) -> List[Comment]:
        """승인된 댓글을 최신순으로, 답글은 부모 아래에 묶어서 반환"""
        self._ensure_movie(movie_id)
        stmt = (
            select(CommentModel, ProfileModel)
            .outerjoin(ProfileModel, CommentModel.user_id == ProfileModel.id)
            .where(CommentModel.movie_id == movie_id, CommentModel.is_approved.is_(True))
            .order_by(CommentModel.created_at.desc(), CommentModel.id.desc())
        )
        comments = [self._build_comment_response(c, author) for c, author in self.db.execute(stmt).all()]

        top_level = [c for c in comments if c.parent_id is None]
        for parent in top_level:
            parent.replies = [c for c in comments if c.parent_id == parent.id]
        return top_level

    async def create_comment(self, movie_id: int, user_id: int, comment_data: CommentCreate) -> Comment:
        await SettingsService(self.db).ensure_feature_enabled("comments_enabled")
        self._ensure_movie(movie_id)

        content = comment_data.content.strip()
        if not content:
            raise ValidationException("Izoh matni bo'sh bo'lishi mumkin emas")

        if comment_data.parent_id is not None:
            parent = self._get_comment_model(comment_data.parent_id)
            if parent.movie_id != movie_id:
                raise ValidationException("Javob berilayotgan izoh boshqa kinoga tegishli")
            # 답글은 1단계만 유지
            parent_id = parent.parent_id or parent.id
        else:
            parent_id = None

        comment_model = CommentModel(
            movie_id=movie_id,
            user_id=user_id,
            content=content,
            rating=comment_data.rating,
            parent_id=parent_id,
            is_approved=True,
        )
        self.db.add(comment_model)
        self.db.commit()
        self.db.refresh(comment_model)
        logger.info("댓글 작성: comment_id=%s movie_id=%s", comment_model.id, movie_id)

        author = self.db.get(ProfileModel, user_id)
        return self._build_comment_response(comment_model, author)

    async def update_comment(self, comment_id: int, user_id: int, comment_data: CommentUpdate) -> Comment:
        comment_model = self._get_comment_model(comment_id)
        if comment_model.user_id != user_id:
            raise PermissionDeniedException("Faqat o'z izohingizni tahrirlashingiz mumkin")

        content = comment_data.content.strip()
        if not content:
            raise ValidationException("Izoh matni bo'sh bo'lishi mumkin emas")

        comment_model.content = content
        comment_model.updated_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(comment_model)

        author = self.db.get(ProfileModel, user_id)
        return self._build_comment_response(comment_model, author)

    async def delete_comment(self, comment_id: int, user_id: int) -> None:
        comment_model = self._get_comment_model(comment_id)
        if comment_model.user_id != user_id:
            raise PermissionDeniedException("Faqat o'z izohingizni o'chirishingiz mumkin")
        self.delete_with_replies([comment_id])
        self.db.commit()
        logger.info("댓글 삭제: comment_id=%s", comment_id)

    def delete_with_replies(self, comment_ids: List[int]) -> int:
        """댓글과 답글 삭제, 삭제된 전체 행 수 반환 (commit 은 호출자)"""
        if not comment_ids:
            return 0
        replies = self.db.execute(delete(CommentModel).where(CommentModel.parent_id.in_(comment_ids)))
        comments = self.db.execute(delete(CommentModel).where(CommentModel.id.in_(comment_ids)))
        return replies.rowcount + comments.rowcount
