# kino/core/exceptions.py

import logging
from fastapi import HTTPException, status


class BaseAppException(Exception):
    """애플리케이션 기본 예외"""

    def __init__(self, message: str, status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundException(BaseAppException):
    def __init__(self, message: str = "Ma'lumot topilmadi"):
        super().__init__(message, status.HTTP_404_NOT_FOUND)


class ValidationException(BaseAppException):
    def __init__(self, message: str = "Ma'lumotlar noto'g'ri"):
        super().__init__(message, status.HTTP_400_BAD_REQUEST)


class ConflictException(BaseAppException):
    def __init__(self, message: str = "Ma'lumot allaqachon mavjud"):
        super().__init__(message, status.HTTP_409_CONFLICT)


class AuthenticationException(BaseAppException):
    def __init__(self, message: str = "Kirish talab qilinadi"):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED)


class PermissionDeniedException(BaseAppException):
    """권한 없음 (관리자 전용, 본인 데이터 아님, 기능 비활성화)"""

    def __init__(self, message: str = "Ruxsat yo'q"):
        super().__init__(message, status.HTTP_403_FORBIDDEN)


class ExternalServiceException(BaseAppException):
    def __init__(self, message: str = "Tashqi xizmatda xatolik yuz berdi"):
        super().__init__(message, status.HTTP_502_BAD_GATEWAY)


SERVER_ERROR_MESSAGE = "Serverda xatolik yuz berdi"


def server_error(logger: logging.Logger, message: str) -> HTTPException:
    """예상하지 못한 오류 기록 후 500 응답 생성 (except 블록 안에서 호출)"""
    logger.exception(message)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=SERVER_ERROR_MESSAGE)
