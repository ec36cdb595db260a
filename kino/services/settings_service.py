# kino/services/settings_service.py

import logging
from datetime import datetime
from typing import List
from sqlalchemy.orm import Session
from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError
from kino.models import (
    ProfileModel,
    MovieModel,
    CommentModel,
    GenreModel,
    TagModel,
    RatingModel,
    FavoriteModel,
    UserSettingsModel,
    SiteSettingsModel,
)
from kino.schemas.settings import (
    UserSettings,
    UserSettingsUpdate,
    UserDataExport,
    SiteSettings,
    SiteSettingsUpdate,
    SystemStats,
)
from kino.core.exceptions import NotFoundException, PermissionDeniedException

logger = logging.getLogger(__name__)

SITE_SETTINGS_ID = 1


def _row_to_dict(model) -> dict:
    """ORM 객체를 컬럼 dict 로 변환 (비밀번호 해시 제외)"""
    data = {}
    for column in model.__table__.columns:
        if column.name == "password_hash":
            continue
        value = getattr(model, column.name)
        if hasattr(value, "value"):
            value = value.value
        data[column.name] = value
    return data


class SettingsService:

    def __init__(self, db: Session):
        self.db = db

    # ------------------------------------------------------------------
    # 사이트 설정
    # ------------------------------------------------------------------
    def _get_site_settings_model(self) -> SiteSettingsModel:
        settings_model = self.db.get(SiteSettingsModel, SITE_SETTINGS_ID)
        if settings_model is None:
            settings_model = SiteSettingsModel(id=SITE_SETTINGS_ID)
            self.db.add(settings_model)
            self.db.commit()
            self.db.refresh(settings_model)
            logger.info("기본 사이트 설정 생성")
        return settings_model

    async def get_site_settings(self) -> SiteSettings:
        return SiteSettings.model_validate(self._get_site_settings_model())

    async def update_site_settings(self, update_data: SiteSettingsUpdate) -> SiteSettings:
        settings_model = self._get_site_settings_model()
        try:
            for field, value in update_data.model_dump(exclude_unset=True).items():
                if value is not None:
                    setattr(settings_model, field, value)
            settings_model.updated_at = datetime.utcnow()
            self.db.commit()
            self.db.refresh(settings_model)
        except SQLAlchemyError:
            self.db.rollback()
            raise
        logger.info("사이트 설정 변경")
        return SiteSettings.model_validate(settings_model)

    async def ensure_feature_enabled(self, feature: str) -> None:
        """registration / comments / ratings 기능 활성화 여부 확인"""
        messages = {
            "registration_enabled": "Ro'yxatdan o'tish vaqtincha o'chirilgan",
            "comments_enabled": "Izohlar vaqtincha o'chirilgan",
            "ratings_enabled": "Baholash vaqtincha o'chirilgan",
        }
        settings_model = self._get_site_settings_model()
        if not getattr(settings_model, feature):
            raise PermissionDeniedException(messages[feature])

    async def get_system_stats(self) -> SystemStats:
        return SystemStats(
            total_users=self.db.scalar(select(func.count(ProfileModel.id))) or 0,
            total_movies=self.db.scalar(select(func.count(MovieModel.id))) or 0,
            total_comments=self.db.scalar(select(func.count(CommentModel.id))) or 0,
        )

    async def export_site_data(self) -> dict:
        """전체 데이터 내보내기 (관리자)"""

        def dump(model_cls) -> List[dict]:
            rows = self.db.execute(select(model_cls).order_by(model_cls.id)).scalars().all()
            return [_row_to_dict(row) for row in rows]

        return {
            "movies": dump(MovieModel),
            "users": dump(ProfileModel),
            "comments": dump(CommentModel),
            "genres": dump(GenreModel),
            "tags": dump(TagModel),
            "exported_at": datetime.utcnow(),
        }

    # ------------------------------------------------------------------
    # 사용자 설정
    # ------------------------------------------------------------------
    def _get_user_settings_model(self, user_id: int) -> UserSettingsModel:
        settings_model = self.db.get(UserSettingsModel, user_id)
        if settings_model is None:
            settings_model = UserSettingsModel(id=user_id)
            self.db.add(settings_model)
            self.db.commit()
            self.db.refresh(settings_model)
            logger.info("사용자 기본 설정 생성: user_id=%s", user_id)
        return settings_model

    async def get_user_settings(self, user_id: int) -> UserSettings:
        """사용자 설정 조회, 없으면 기본값으로 생성"""
        return UserSettings.model_validate(self._get_user_settings_model(user_id))

    async def update_user_settings(self, user_id: int, update_data: UserSettingsUpdate) -> UserSettings:
        settings_model = self._get_user_settings_model(user_id)
        try:
            for field, value in update_data.model_dump(exclude_unset=True).items():
                if value is not None:
                    setattr(settings_model, field, value)
            settings_model.updated_at = datetime.utcnow()
            self.db.commit()
            self.db.refresh(settings_model)
        except SQLAlchemyError:
            self.db.rollback()
            raise
        return UserSettings.model_validate(settings_model)

    async def export_user_data(self, user_id: int) -> UserDataExport:
        profile_model = self.db.get(ProfileModel, user_id)
        if profile_model is None:
            raise NotFoundException("Foydalanuvchi topilmadi")

        settings_model = self.db.get(UserSettingsModel, user_id)
        ratings = self.db.execute(
            select(RatingModel).where(RatingModel.user_id == user_id).order_by(RatingModel.id)
        ).scalars().all()
        comments = self.db.execute(
            select(CommentModel).where(CommentModel.user_id == user_id).order_by(CommentModel.id)
        ).scalars().all()
        favorites = self.db.execute(
            select(FavoriteModel).where(FavoriteModel.user_id == user_id).order_by(FavoriteModel.id)
        ).scalars().all()

        profile = _row_to_dict(profile_model)
        return UserDataExport(
            user={"id": profile_model.id, "email": profile_model.email, "created_at": profile_model.created_at},
            profile=profile,
            settings=_row_to_dict(settings_model) if settings_model else None,
            ratings=[_row_to_dict(r) for r in ratings],
            comments=[_row_to_dict(c) for c in comments],
            favorites=[_row_to_dict(f) for f in favorites],
            exported_at=datetime.utcnow(),
        )
