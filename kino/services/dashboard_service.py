# kino/services/dashboard_service.py

import logging
from datetime import datetime, timedelta
from typing import List
from sqlalchemy.orm import Session
from sqlalchemy import select, func
from kino.models import (
    MovieModel,
    MovieStatus,
    ProfileModel,
    CommentModel,
    RatingModel,
    GenreModel,
    TagModel,
)
from kino.schemas.admin import DashboardStats, RecentActivity, ChartPoint, DashboardCharts

logger = logging.getLogger(__name__)

RECENT_LIMIT = 5
ACTIVITY_LIMIT = 15
MONTH_NAMES = ["Yan", "Fev", "Mar", "Apr", "May", "Iyn", "Iyl", "Avg", "Sen", "Okt", "Noy", "Dek"]
STATUS_LABELS = [
    (MovieStatus.active, "Faol"),
    (MovieStatus.pending, "Kutilmoqda"),
    (MovieStatus.inactive, "Nofaol"),
]


def shift_month(year: int, month: int, delta: int):
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


class DashboardService:

    def __init__(self, db: Session):
        self.db = db

    def _count(self, column, *conditions) -> int:
        return self.db.scalar(select(func.count(column)).where(*conditions)) or 0

    async def get_stats(self) -> DashboardStats:
        """관리자 대시보드 통계"""
        now = datetime.utcnow()
        total_comments = self._count(CommentModel.id)
        pending_comments = self._count(CommentModel.id, CommentModel.is_approved.is_(False))
        approved_comments = self._count(CommentModel.id, CommentModel.is_approved.is_(True))
        total_views = self.db.scalar(select(func.coalesce(func.sum(MovieModel.view_count), 0)))
        average_rating = self.db.scalar(select(func.avg(MovieModel.rating)))

        return DashboardStats(
            total_movies=self._count(MovieModel.id),
            total_users=self._count(ProfileModel.id),
            total_comments=total_comments,
            total_views=total_views or 0,
            average_rating=round(float(average_rating), 1) if average_rating else 0.0,
            new_movies_this_month=self._count(MovieModel.id, MovieModel.created_at >= now - timedelta(days=30)),
            new_users_this_week=self._count(ProfileModel.id, ProfileModel.created_at >= now - timedelta(days=7)),
            pending_comments=pending_comments,
            total_genres=self._count(GenreModel.id),
            total_tags=self._count(TagModel.id),
            approved_comments=approved_comments,
            rejected_comments=max(total_comments - approved_comments - pending_comments, 0),
        )

    async def get_recent_activity(self) -> List[RecentActivity]:
        activities: List[RecentActivity] = []

        movies = self.db.execute(
            select(MovieModel).order_by(MovieModel.created_at.desc(), MovieModel.id.desc()).limit(RECENT_LIMIT)
        ).scalars().all()
        for movie in movies:
            activities.append(RecentActivity(
                id=f"movie-{movie.id}",
                type="movie",
                title="Yangi kino qo'shildi",
                description=movie.title,
                created_at=movie.created_at,
            ))

        users = self.db.execute(
            select(ProfileModel).order_by(ProfileModel.created_at.desc(), ProfileModel.id.desc()).limit(RECENT_LIMIT)
        ).scalars().all()
        for user in users:
            activities.append(RecentActivity(
                id=f"user-{user.id}",
                type="user",
                title="Yangi foydalanuvchi ro'yxatdan o'tdi",
                description=user.full_name or user.email,
                created_at=user.created_at,
            ))

        comments = self.db.execute(
            select(CommentModel, ProfileModel.full_name, MovieModel.title)
            .outerjoin(ProfileModel, CommentModel.user_id == ProfileModel.id)
            .outerjoin(MovieModel, CommentModel.movie_id == MovieModel.id)
            .order_by(CommentModel.created_at.desc(), CommentModel.id.desc())
            .limit(RECENT_LIMIT)
        ).all()
        for comment, full_name, movie_title in comments:
            activities.append(RecentActivity(
                id=f"comment-{comment.id}",
                type="comment",
                title="Yangi sharh",
                description=f'{full_name or "Foydalanuvchi"} "{movie_title}" ga sharh qoldirdi',
                created_at=comment.created_at,
            ))

        ratings = self.db.execute(
            select(RatingModel, ProfileModel.full_name, MovieModel.title)
            .outerjoin(ProfileModel, RatingModel.user_id == ProfileModel.id)
            .outerjoin(MovieModel, RatingModel.movie_id == MovieModel.id)
            .order_by(RatingModel.created_at.desc(), RatingModel.id.desc())
            .limit(RECENT_LIMIT)
        ).all()
        for rating, full_name, movie_title in ratings:
            activities.append(RecentActivity(
                id=f"rating-{rating.id}",
                type="rating",
                title="Yangi baho",
                description=f'{full_name or "Foydalanuvchi"} "{movie_title}" ga {rating.rating} yulduz berdi',
                created_at=rating.created_at,
            ))

        activities.sort(key=lambda activity: activity.created_at, reverse=True)
        return activities[:ACTIVITY_LIMIT]

    async def get_charts(self) -> DashboardCharts:
        movies_by_status = [
            ChartPoint(name=label, value=self._count(MovieModel.id, MovieModel.status == status))
            for status, label in STATUS_LABELS
        ]

        # 최근 6개월 가입자 (이번 달 포함)
        now = datetime.utcnow()
        start_year, start_month = shift_month(now.year, now.month, -5)
        since = datetime(start_year, start_month, 1)
        created = self.db.execute(
            select(ProfileModel.created_at).where(ProfileModel.created_at >= since)
        ).scalars().all()

        users_by_month = []
        for offset in range(6):
            year, month = shift_month(start_year, start_month, offset)
            count = sum(1 for c in created if c.year == year and c.month == month)
            users_by_month.append(ChartPoint(name=MONTH_NAMES[month - 1], value=count))

        distribution = dict(
            self.db.execute(select(RatingModel.rating, func.count(RatingModel.id)).group_by(RatingModel.rating)).all()
        )
        ratings_distribution = [
            ChartPoint(name=f"{stars} yulduz", value=distribution.get(stars, 0)) for stars in range(1, 6)
        ]

        return DashboardCharts(
            movies_by_status=movies_by_status,
            users_by_month=users_by_month,
            ratings_distribution=ratings_distribution,
        )
