# kino/schemas/comment.py

from typing import Optional, List
from pydantic import BaseModel, Field
from datetime import datetime
from kino.schemas.profile import ProfileAuthor


class Comment(BaseModel):
    id: int = Field(description="댓글 ID")
    movie_id: int = Field(description="영화 ID")
    user_id: int = Field(description="작성자 ID")
    content: str = Field(description="댓글 내용")
    rating: Optional[int] = Field(default=None, description="평점 (1 ~ 5)")
    parent_id: Optional[int] = Field(default=None, description="부모 댓글 ID")
    is_approved: bool = Field(default=True, description="승인 여부")
    created_at: Optional[datetime] = Field(default=None, description="생성일시")
    updated_at: Optional[datetime] = Field(default=None, description="수정일시")
    profiles: Optional[ProfileAuthor] = Field(default=None, description="작성자")
    replies: List["Comment"] = Field(default_factory=list, description="답글 (1단계)")

    class Config:
        from_attributes = True


class CommentCreate(BaseModel):
    content: str = Field(description="댓글 내용", max_length=2000)
    rating: Optional[int] = Field(default=None, description="평점 (1 ~ 5)", ge=1, le=5)
    parent_id: Optional[int] = Field(default=None, description="답글 대상 댓글 ID")


class CommentUpdate(BaseModel):
    content: str = Field(description="댓글 내용", max_length=2000)


Comment.model_rebuild()
