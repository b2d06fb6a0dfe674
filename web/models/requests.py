"""
요청 스키마 (Pydantic)

Web API 요청 데이터 검증
"""

from decimal import Decimal

from pydantic import BaseModel, Field


class PlayerCreateRequest(BaseModel):
    """로스터 플레이어 추가 요청"""

    name: str = Field(..., min_length=1, description="표시 이름")
    account_number: int = Field(..., ge=0, description="계좌번호 (주간을 가로지르는 식별자)")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"name": "Alice", "account_number": 7},
            ]
        }
    }


class PlayerRenameRequest(BaseModel):
    """플레이어 이름 변경 요청"""

    name: str = Field(..., min_length=1, description="새 이름")


class CarryPaymentRequest(BaseModel):
    """이월 잔액 납부 요청

    week_id가 있으면 해당 주간 이월분 납부로 기록.
    """

    amount: Decimal = Field(..., gt=0, description="납부 금액")
    note: str = Field(default="", description="메모")
    week_id: str | None = Field(default=None, description="대상 주간 ID (없으면 일시 납부)")


class PayOffRequest(BaseModel):
    """이월 잔액 전액 납부 요청"""

    note: str = Field(default="", description="메모 (기본값: Paid in full)")


class WeekCreateRequest(BaseModel):
    """주간 생성 요청 (기간 미지정 시 지금부터 7일)"""

    name: str = Field(..., min_length=1, description="주간 이름")
    start: str | None = Field(default=None, description="시작 시각 (ISO-8601)")
    end: str | None = Field(default=None, description="종료 시각 (ISO-8601)")


class WeekDuplicateRequest(BaseModel):
    """주간 복제 요청"""

    name: str = Field(..., min_length=1, description="새 주간 이름")


class WeekPlayerCreateRequest(BaseModel):
    """주간 플레이어 추가 요청"""

    name: str = Field(..., min_length=1, description="표시 이름")
    account_number: int = Field(..., ge=0, description="계좌번호")


class RosterPlayerAddRequest(BaseModel):
    """로스터 플레이어를 주간에 추가하는 요청"""

    player_id: str = Field(..., description="로스터 플레이어 ID")


class StakeRequest(BaseModel):
    """스테이크 입력 요청 (부호는 엔드포인트가 결정)"""

    amount: Decimal = Field(..., ge=0, description="금액 (절대값)")


class NoteRequest(BaseModel):
    """메모 변경 요청"""

    note: str = Field(default="", description="메모")


class MarkPaidRequest(BaseModel):
    """정산 완료 요청 (금액 미지정 시 청구액 전액)"""

    amount: Decimal | None = Field(default=None, ge=0, description="받은 금액")


class MarkPartialRequest(BaseModel):
    """부분 정산 요청"""

    amount: Decimal = Field(..., ge=0, description="받은 금액")
