"""Pydantic 스키마 정의"""
from pydantic import BaseModel, Field, field_validator
from datetime import datetime


class TimeoutURLEvent(BaseModel):
    """'이 URL이 제때 응답하지 않았다'는 리포트 (timeout-url 이벤트)"""
    url: str = Field(..., description="타임아웃이 발생한 URL")


class ForbiddenHostname(BaseModel):
    """금지 hostname 목록의 항목"""
    hostname: str = Field(..., min_length=1, description="크롤링 금지 hostname")

    @field_validator('hostname')
    @classmethod
    def validate_hostname(cls, v: str) -> str:
        """공백 제거 후 빈 값 거부"""
        if not v.strip():
            raise ValueError('hostname은 공백만으로 구성될 수 없습니다')
        return v.strip()


class BlackListThreshold(BaseModel):
    """블랙리스트 임계값 (확인된 타임아웃 횟수)"""
    threshold: int = Field(..., ge=0, description="이 횟수에 도달하면 hostname을 금지 목록에 추가")


class HealthResponse(BaseModel):
    """헬스 체크 응답"""
    status: str
    timestamp: datetime
    version: str
