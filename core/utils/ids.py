"""
식별자 생성

전역 고유 문자열 ID (UUID4)
"""

from uuid import uuid4


def generate_id() -> str:
    """UUID4 문자열 생성"""
    return str(uuid4())


class UuidGenerator:
    """UUID 기반 ID 생성기

    IIdGenerator Protocol 구현.
    """

    def new_id(self) -> str:
        """새 ID 발급"""
        return generate_id()
