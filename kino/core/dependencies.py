# kino/core/dependencies.py

from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from kino.database import get_db
from kino.schemas.profile import Profile
from kino.services.user_service import UserService
from kino.core.auth import verify_token

security = HTTPBearer(auto_error=False)


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    user_service: UserService = Depends(get_user_service)
) -> Profile:
    """현재 로그인한 사용자 조회"""
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Kirish talab qilinadi"
        )

    token = credentials.credentials
    email = verify_token(token)

    if not email:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token yaroqsiz"
        )

    user = await user_service.get_profile_by_email(email)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Foydalanuvchi topilmadi"
        )

    return user


async def get_optional_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    user_service: UserService = Depends(get_user_service)
) -> Optional[Profile]:
    """현재 로그인한 사용자 조회 None 허용"""
    if not credentials:
        return None

    email = verify_token(credentials.credentials)
    if not email:
        return None

    return await user_service.get_profile_by_email(email)


async def get_current_admin(current_user: Profile = Depends(get_current_user)) -> Profile:
    """관리자 권한 확인 (profiles.role == admin)"""
    if current_user.role != "admin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin paneliga kirish uchun ruxsat yo'q"
        )
    return current_user
