# kino/schemas/profile.py

from typing import Optional, Literal
from pydantic import BaseModel, Field
from datetime import datetime


class Profile(BaseModel):
    id: int = Field(description="사용자 ID")
    email: str = Field(description="이메일")
    full_name: Optional[str] = Field(default=None, description="이름")
    avatar_url: Optional[str] = Field(default=None, description="프로필 이미지 URL")
    role: Literal["user", "admin"] = Field(default="user", description="권한")
    created_at: Optional[datetime] = Field(default=None, description="생성일시")
    updated_at: Optional[datetime] = Field(default=None, description="수정일시")
    last_login: Optional[datetime] = Field(default=None, description="마지막 로그인")

    class Config:
        from_attributes = True


class ProfileAuthor(BaseModel):
    """댓글 작성자 정보"""

    id: int = Field(description="사용자 ID")
    full_name: Optional[str] = Field(default=None, description="이름")
    avatar_url: Optional[str] = Field(default=None, description="프로필 이미지 URL")

    class Config:
        from_attributes = True


class SignupRequest(BaseModel):
    email: str = Field(description="이메일")
    password: str = Field(description="비밀번호", min_length=6)
    full_name: Optional[str] = Field(default=None, description="이름", max_length=100)


class LoginRequest(BaseModel):
    email: str = Field(description="이메일")
    password: str = Field(description="비밀번호")


class TokenResponse(BaseModel):
    access_token: str = Field(description="액세스 토큰")
    token_type: str = Field(default="bearer", description="토큰 타입")
    user: Profile = Field(description="사용자 정보")


class ProfileUpdate(BaseModel):
    """프로필 수정 요청"""

    full_name: Optional[str] = Field(default=None, max_length=100, description="이름")
    avatar_url: Optional[str] = Field(default=None, description="프로필 이미지 URL")


class PasswordChangeRequest(BaseModel):
    new_password: str = Field(description="새 비밀번호")
    confirm_password: str = Field(description="새 비밀번호 확인")


class ProfileStats(BaseModel):
    total_ratings: int = Field(default=0, description="평가한 영화 수")
    total_comments: int = Field(default=0, description="작성한 댓글 수")
    total_favorites: int = Field(default=0, description="즐겨찾기 수")
    average_rating: float = Field(default=0.0, description="평균 평점")
    movies_watched: int = Field(default=0, description="본 영화 수")
    reviews_written: int = Field(default=0, description="작성한 리뷰 수")


class Achievement(BaseModel):
    id: str
    name: str
    description: str
    icon: str
    earned: bool
    progress: int
    max_progress: int
