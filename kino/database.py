# kino/database.py

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from dotenv import load_dotenv
from kino.core.config import get_settings

# .env 파일 로드
load_dotenv()

settings = get_settings()
DATABASE_URL = settings.database_url

# SQLite 는 스레드 체크 해제 필요
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

# 엔진 생성
engine = create_engine(
    DATABASE_URL,
    echo=settings.debug,  # SQL 로그 출력
    pool_pre_ping=True,  # 연결 상태 확인
    connect_args=connect_args,
)

# 세션 팩토리 생성
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)

# Base 클래스 생성
Base = declarative_base()


# 의존성 주입용 함수
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
