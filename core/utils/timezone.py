"""
시간 유틸리티

내부 저장: UTC ISO-8601 문자열 (정렬 가능) 원칙 준수를 위한 헬퍼 함수
"""

from datetime import datetime, timedelta, timezone

from core.constants import Defaults


def now_utc() -> datetime:
    """현재 UTC 시간 반환 (타임존 명시)

    Returns:
        현재 UTC 시간 (tzinfo=timezone.utc)
    """
    return datetime.now(timezone.utc)


def to_iso(dt: datetime) -> str:
    """datetime을 UTC ISO 문자열로 변환

    naive datetime은 UTC로 간주.

    Example:
        >>> to_iso(datetime(2026, 2, 20, 16, 0, tzinfo=timezone.utc))
        '2026-02-20T16:00:00.000Z'
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def parse_iso(value: str) -> datetime:
    """ISO 문자열을 UTC datetime으로 변환

    'Z' 접미사와 오프셋 표기 모두 허용.

    Raises:
        ValueError: 형식이 잘못된 경우
    """
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def now_iso() -> str:
    """현재 UTC 시간 ISO 문자열"""
    return to_iso(now_utc())


def default_week_range(start: datetime | None = None) -> tuple[str, str]:
    """신규 주간 기본 기간 [start, start + 7일)

    Args:
        start: 시작 시각 (None이면 현재)

    Returns:
        (start_iso, end_iso)
    """
    if start is None:
        start = now_utc()
    end = start + timedelta(days=Defaults.WEEK_LENGTH_DAYS)
    return to_iso(start), to_iso(end)


def validate_week_range(start: str, end: str) -> None:
    """주간 기간 검증

    Raises:
        ValueError: ISO 형식이 아니거나 종료가 시작보다 빠르지 않은 경우
    """
    if parse_iso(end) <= parse_iso(start):
        raise ValueError(f"주간 종료가 시작보다 빠름: start={start}, end={end}")


def next_week_range(previous_end: str) -> tuple[str, str]:
    """이전 주간 종료일 다음 날부터 7일 기간

    시작 시각은 Defaults.WEEK_START_HOUR_UTC로 고정 (타임존 드리프트 방지).

    Example:
        >>> next_week_range("2026-03-08T23:30:00.000Z")
        ('2026-03-09T12:00:00.000Z', '2026-03-16T12:00:00.000Z')
    """
    end = parse_iso(previous_end)
    next_day = end.date() + timedelta(days=1)
    start = datetime(
        next_day.year,
        next_day.month,
        next_day.day,
        Defaults.WEEK_START_HOUR_UTC,
        tzinfo=timezone.utc,
    )
    return default_week_range(start)


class SystemClock:
    """시스템 시계

    IClock Protocol 구현. 정렬 가능한 UTC ISO 문자열 반환.
    """

    def now(self) -> str:
        """현재 시각"""
        return now_iso()
