# kino/services/admin_user_service.py

import csv
import io
import logging
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import select, func, or_, delete, update
from kino.models import (
    ProfileModel,
    MovieModel,
    CommentModel,
    RatingModel,
    WatchlistModel,
    FavoriteModel,
    UserSettingsModel,
)
from kino.schemas.admin import AdminUser, AdminUserListResponse, BulkActionResponse
from kino.services.comment_service import CommentService
from kino.services.movie_service import total_pages_for
from kino.core.exceptions import NotFoundException, ValidationException

logger = logging.getLogger(__name__)

USERS_PER_PAGE = 20
USER_SORT_COLUMNS = {
    "created_at": ProfileModel.created_at,
    "email": ProfileModel.email,
    "full_name": ProfileModel.full_name,
    "role": ProfileModel.role,
}
CSV_HEADER = ["ID", "Email", "Full Name", "Role", "Created At", "Updated At"]


class AdminUserService:

    def __init__(self, db: Session):
        self.db = db

    def _get_profile_model(self, user_id: int) -> ProfileModel:
        profile_model = self.db.get(ProfileModel, user_id)
        if profile_model is None:
            raise NotFoundException("Foydalanuvchi topilmadi")
        return profile_model

    def _build_admin_user(self, profile_model: ProfileModel) -> AdminUser:
        total_comments = self.db.scalar(
            select(func.count(CommentModel.id)).where(CommentModel.user_id == profile_model.id)
        )
        total_ratings, avg_rating = self.db.execute(
            select(func.count(RatingModel.id), func.avg(RatingModel.rating)).where(RatingModel.user_id == profile_model.id)
        ).one()
        return AdminUser(
            id=profile_model.id,
            email=profile_model.email,
            full_name=profile_model.full_name,
            avatar_url=profile_model.avatar_url,
            role=profile_model.role,
            created_at=profile_model.created_at,
            updated_at=profile_model.updated_at,
            total_comments=total_comments or 0,
            total_ratings=total_ratings or 0,
            avg_rating=round(float(avg_rating), 1) if avg_rating else 0.0,
        )

    async def list_users(
        self,
        search: Optional[str] = None,
        role: Optional[str] = None,
        sort_by: str = "created_at",
        sort_order: str = "desc",
        page: int = 1,
    ) -> AdminUserListResponse:
        """사용자 목록 (검색/권한 필터/정렬/페이지)"""
        conditions = []
        term = (search or "").strip().lower()
        if term:
            pattern = f"%{term}%"
            conditions.append(
                or_(func.lower(ProfileModel.email).like(pattern), func.lower(ProfileModel.full_name).like(pattern))
            )
        if role and role != "all":
            conditions.append(ProfileModel.role == role)

        total = self.db.scalar(select(func.count(ProfileModel.id)).where(*conditions)) or 0

        column = USER_SORT_COLUMNS.get(sort_by, ProfileModel.created_at)
        ordering = column.asc() if sort_order == "asc" else column.desc()
        tie_breaker = ProfileModel.id.asc() if sort_order == "asc" else ProfileModel.id.desc()

        page = max(page, 1)
        stmt = (
            select(ProfileModel)
            .where(*conditions)
            .order_by(ordering, tie_breaker)
            .offset((page - 1) * USERS_PER_PAGE)
            .limit(USERS_PER_PAGE)
        )
        users = [self._build_admin_user(p) for p in self.db.execute(stmt).scalars().all()]
        return AdminUserListResponse(
            users=users,
            total=total,
            page=page,
            total_pages=total_pages_for(total, USERS_PER_PAGE),
        )

    async def set_role(self, user_id: int, role: str, admin_id: int) -> AdminUser:
        if user_id == admin_id and role != "admin":
            raise ValidationException("O'z rolingizni o'zgartira olmaysiz")
        profile_model = self._get_profile_model(user_id)
        profile_model.role = role
        profile_model.updated_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(profile_model)
        logger.info("권한 변경: user_id=%s role=%s", user_id, role)
        return self._build_admin_user(profile_model)

    def _delete_users(self, user_ids: List[int]) -> int:
        """사용자와 사용자 데이터 삭제 (commit 은 호출자)"""
        comment_ids = self.db.execute(
            select(CommentModel.id).where(CommentModel.user_id.in_(user_ids))
        ).scalars().all()
        CommentService(self.db).delete_with_replies(list(comment_ids))

        for model_cls in (RatingModel, WatchlistModel, FavoriteModel):
            self.db.execute(delete(model_cls).where(model_cls.user_id.in_(user_ids)))
        self.db.execute(delete(UserSettingsModel).where(UserSettingsModel.id.in_(user_ids)))
        self.db.execute(update(MovieModel).where(MovieModel.created_by.in_(user_ids)).values(created_by=None))
        result = self.db.execute(delete(ProfileModel).where(ProfileModel.id.in_(user_ids)))
        return result.rowcount

    async def bulk_action(self, user_ids: List[int], action: str, admin_id: int) -> BulkActionResponse:
        """일괄 처리 (promote / demote / delete)"""
        user_ids = list(dict.fromkeys(user_ids))
        if admin_id in user_ids and action in ("demote", "delete"):
            raise ValidationException("O'zingizga nisbatan bu amalni bajara olmaysiz")

        if action == "delete":
            affected = self._delete_users(user_ids)
            message = f"{affected} ta foydalanuvchi o'chirildi"
        else:
            role = "admin" if action == "promote" else "user"
            result = self.db.execute(
                update(ProfileModel)
                .where(ProfileModel.id.in_(user_ids))
                .values(role=role, updated_at=datetime.utcnow())
            )
            affected = result.rowcount
            message = f"{affected} ta foydalanuvchi roli yangilandi"

        self.db.commit()
        logger.info("사용자 일괄 처리: action=%s affected=%s", action, affected)
        return BulkActionResponse(action=action, affected=affected, message=message)

    async def export_csv(self) -> str:
        profiles = self.db.execute(
            select(ProfileModel).order_by(ProfileModel.created_at.desc(), ProfileModel.id.desc())
        ).scalars().all()

        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        for p in profiles:
            writer.writerow([
                p.id,
                p.email,
                p.full_name or "",
                p.role,
                p.created_at.isoformat() if p.created_at else "",
                p.updated_at.isoformat() if p.updated_at else "",
            ])
        return buffer.getvalue()
