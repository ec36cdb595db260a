# kino/api/v1/auth.py

import logging
from fastapi import APIRouter, Depends, status
from kino.schemas.profile import Profile, SignupRequest, LoginRequest, TokenResponse
from kino.services.user_service import UserService
from kino.core.dependencies import get_current_user, get_user_service
from kino.core.exceptions import BaseAppException, server_error

logger = logging.getLogger(__name__)

router = APIRouter()


# 이메일 회원가입
@router.post(
    "/signup",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="회원가입",
    description="이메일과 비밀번호(6자 이상)로 회원가입하고 액세스 토큰을 발급합니다.",
)
async def signup(signup_data: SignupRequest, user_service: UserService = Depends(get_user_service)):
    try:
        return await user_service.signup(signup_data)
    except BaseAppException:
        raise
    except Exception:
        raise server_error(logger, "회원가입 실패")


# 이메일 로그인
@router.post(
    "/login",
    response_model=TokenResponse,
    summary="로그인",
    description="이메일과 비밀번호로 로그인합니다.",
)
async def login(login_data: LoginRequest, user_service: UserService = Depends(get_user_service)):
    try:
        return await user_service.login(login_data)
    except BaseAppException:
        raise
    except Exception:
        raise server_error(logger, "로그인 실패")


@router.get(
    "/me",
    response_model=Profile,
    summary="내 정보",
    description="현재 로그인한 사용자의 프로필을 조회합니다.",
)
async def me(current_user: Profile = Depends(get_current_user)):
    return current_user
