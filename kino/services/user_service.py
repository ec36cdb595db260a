# kino/services/user_service.py

import logging
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError
from kino.models import ProfileModel, RatingModel, CommentModel, FavoriteModel
from kino.schemas.profile import (
    Profile,
    SignupRequest,
    LoginRequest,
    TokenResponse,
    ProfileUpdate,
    PasswordChangeRequest,
    ProfileStats,
    Achievement,
)
from kino.services.settings_service import SettingsService
from kino.core.auth import get_password_hash, verify_password, create_access_token
from kino.core.exceptions import (
    NotFoundException,
    ConflictException,
    ValidationException,
    AuthenticationException,
)

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class UserService:

    def __init__(self, db: Session):
        self.db = db

    def _get_profile_model(self, user_id: int) -> ProfileModel:
        profile_model = self.db.get(ProfileModel, user_id)
        if profile_model is None:
            raise NotFoundException("Foydalanuvchi topilmadi")
        return profile_model

    async def get_profile_by_email(self, email: str) -> Optional[Profile]:
        stmt = select(ProfileModel).where(ProfileModel.email == email.lower())
        profile_model = self.db.execute(stmt).scalar_one_or_none()
        return Profile.model_validate(profile_model) if profile_model else None

    async def get_profile_by_id(self, user_id: int) -> Profile:
        return Profile.model_validate(self._get_profile_model(user_id))

    async def signup(self, signup_data: SignupRequest) -> TokenResponse:
        """이메일 회원가입 후 토큰 발급"""
        await SettingsService(self.db).ensure_feature_enabled("registration_enabled")

        email = signup_data.email.strip().lower()
        if not email or "@" not in email:
            raise ValidationException("Email manzil noto'g'ri")
        if await self.get_profile_by_email(email):
            raise ConflictException("Bu email manzil allaqachon ro'yxatdan o'tgan")

        profile_model = ProfileModel(
            email=email,
            password_hash=get_password_hash(signup_data.password),
            full_name=(signup_data.full_name or "").strip() or None,
            role="user",
            last_login=datetime.utcnow(),
        )
        try:
            self.db.add(profile_model)
            self.db.commit()
            self.db.refresh(profile_model)
        except SQLAlchemyError:
            self.db.rollback()
            raise

        logger.info("회원가입 완료: user_id=%s", profile_model.id)
        return self._issue_token(profile_model)

    async def login(self, login_data: LoginRequest) -> TokenResponse:
        stmt = select(ProfileModel).where(ProfileModel.email == login_data.email.strip().lower())
        profile_model = self.db.execute(stmt).scalar_one_or_none()

        if not profile_model or not verify_password(login_data.password, profile_model.password_hash):
            logger.warning("로그인 실패: %s", login_data.email)
            raise AuthenticationException("Email yoki parol noto'g'ri")

        profile_model.last_login = datetime.utcnow()
        self.db.commit()
        self.db.refresh(profile_model)
        return self._issue_token(profile_model)

    def _issue_token(self, profile_model: ProfileModel) -> TokenResponse:
        access_token = create_access_token(data={"sub": profile_model.email})
        return TokenResponse(access_token=access_token, user=Profile.model_validate(profile_model))

    async def update_profile(self, user_id: int, update_data: ProfileUpdate) -> Profile:
        profile_model = self._get_profile_model(user_id)
        for field, value in update_data.model_dump(exclude_unset=True).items():
            setattr(profile_model, field, value.strip() if isinstance(value, str) else value)
        profile_model.updated_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(profile_model)
        return Profile.model_validate(profile_model)

    async def change_password(self, user_id: int, password_data: PasswordChangeRequest) -> None:
        if password_data.new_password != password_data.confirm_password:
            raise ValidationException("Yangi parollar mos kelmaydi")
        if len(password_data.new_password) < MIN_PASSWORD_LENGTH:
            raise ValidationException("Parol kamida 6 ta belgidan iborat bo'lishi kerak")

        profile_model = self._get_profile_model(user_id)
        profile_model.password_hash = get_password_hash(password_data.new_password)
        profile_model.updated_at = datetime.utcnow()
        self.db.commit()
        logger.info("비밀번호 변경: user_id=%s", user_id)

    async def get_stats(self, user_id: int) -> ProfileStats:
        """프로필 통계"""
        total_ratings = self.db.scalar(
            select(func.count(RatingModel.id)).where(RatingModel.user_id == user_id)
        ) or 0
        average_rating = self.db.scalar(
            select(func.avg(RatingModel.rating)).where(RatingModel.user_id == user_id)
        )
        total_comments = self.db.scalar(
            select(func.count(CommentModel.id)).where(CommentModel.user_id == user_id)
        ) or 0
        total_favorites = self.db.scalar(
            select(func.count(FavoriteModel.id)).where(FavoriteModel.user_id == user_id)
        ) or 0

        return ProfileStats(
            total_ratings=total_ratings,
            total_comments=total_comments,
            total_favorites=total_favorites,
            average_rating=round(float(average_rating), 2) if average_rating else 0.0,
            movies_watched=total_ratings,
            reviews_written=total_comments,
        )

    async def get_achievements(self, user_id: int) -> List[Achievement]:
        stats = await self.get_stats(user_id)
        return [
            Achievement(
                id="1",
                name="Kino Sevuvchi",
                description="10 ta filmni baholang",
                icon="🎬",
                earned=stats.total_ratings >= 10,
                progress=stats.total_ratings,
                max_progress=10,
            ),
            Achievement(
                id="2",
                name="Tanqidchi",
                description="25 ta sharh yozing",
                icon="✍️",
                earned=stats.total_comments >= 25,
                progress=stats.total_comments,
                max_progress=25,
            ),
            Achievement(
                id="3",
                name="Kolleksioner",
                description="50 ta filmni sevimlilarga qo'shing",
                icon="❤️",
                earned=stats.total_favorites >= 50,
                progress=stats.total_favorites,
                max_progress=50,
            ),
            Achievement(
                id="4",
                name="Ekspert",
                description="O'rtacha 4+ baho bering",
                icon="⭐",
                earned=stats.average_rating >= 4,
                progress=round(stats.average_rating * 10),
                max_progress=50,
            ),
        ]
