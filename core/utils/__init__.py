"""
유틸리티 패키지

시간 처리, ID 생성, debounce 타이머 등 공통 유틸리티
"""

from core.utils.debounce import Debouncer
from core.utils.ids import UuidGenerator, generate_id
from core.utils.money import to_decimal, to_json_number
from core.utils.timezone import (
    SystemClock,
    default_week_range,
    next_week_range,
    now_iso,
    now_utc,
    parse_iso,
    to_iso,
)

__all__ = [
    "Debouncer",
    "UuidGenerator",
    "generate_id",
    "to_decimal",
    "to_json_number",
    "SystemClock",
    "default_week_range",
    "next_week_range",
    "now_iso",
    "now_utc",
    "parse_iso",
    "to_iso",
]
