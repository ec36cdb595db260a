# kino/api/v1/settings.py

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from kino.database import get_db
from kino.schemas.profile import Profile, PasswordChangeRequest
from kino.schemas.settings import UserSettings, UserSettingsUpdate, UserDataExport
from kino.services.settings_service import SettingsService
from kino.services.user_service import UserService
from kino.core.dependencies import get_current_user, get_user_service
from kino.core.exceptions import BaseAppException, server_error

logger = logging.getLogger(__name__)

router = APIRouter()


def get_settings_service(db: Session = Depends(get_db)) -> SettingsService:
    return SettingsService(db)


@router.get(
    "",
    response_model=UserSettings,
    summary="내 설정",
    description="사용자 설정을 조회합니다. 처음 조회하면 기본값으로 생성됩니다.",
)
async def get_user_settings(
    current_user: Profile = Depends(get_current_user),
    settings_service: SettingsService = Depends(get_settings_service),
):
    try:
        return await settings_service.get_user_settings(current_user.id)
    except Exception:
        raise server_error(logger, "사용자 설정 조회 실패")


@router.put("", response_model=UserSettings, summary="설정 수정")
async def update_user_settings(
    update_data: UserSettingsUpdate,
    current_user: Profile = Depends(get_current_user),
    settings_service: SettingsService = Depends(get_settings_service),
):
    try:
        return await settings_service.update_user_settings(current_user.id, update_data)
    except BaseAppException:
        raise
    except Exception:
        raise server_error(logger, "사용자 설정 수정 실패")


@router.post("/password", summary="비밀번호 변경")
async def change_password(
    password_data: PasswordChangeRequest,
    current_user: Profile = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
):
    try:
        await user_service.change_password(current_user.id, password_data)
        return {"message": "Parol muvaffaqiyatli o'zgartirildi"}
    except BaseAppException:
        raise
    except Exception:
        raise server_error(logger, "비밀번호 변경 실패")


@router.get(
    "/export",
    response_model=UserDataExport,
    summary="내 데이터 내보내기",
    description="프로필, 설정, 평점, 댓글, 즐겨찾기를 JSON 으로 내보냅니다.",
)
async def export_user_data(
    current_user: Profile = Depends(get_current_user),
    settings_service: SettingsService = Depends(get_settings_service),
):
    try:
        return await settings_service.export_user_data(current_user.id)
    except BaseAppException:
        raise
    except Exception:
        raise server_error(logger, "데이터 내보내기 실패")
