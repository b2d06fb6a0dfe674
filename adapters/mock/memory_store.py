"""
Mock key/value 저장소

테스트용 인메모리 IKeyValueStore 구현.
"""


class MemoryKeyValueStore:
    """인메모리 key/value 저장소

    IKeyValueStore Protocol 구현.
    쓰기 횟수를 기록하여 저장 여부를 테스트에서 검증 가능.

    사용 예시:
    ```python
    kv = MemoryKeyValueStore()
    store = LedgerStore(kv)
    store.create_week("Week 1")

    assert kv.write_count == 1
    assert "slide_app_data" in kv.data
    ```
    """

    def __init__(self, initial: dict[str, str] | None = None):
        self.data: dict[str, str] = dict(initial or {})
        self.write_count = 0

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value
        self.write_count += 1

    def remove(self, key: str) -> None:
        self.data.pop(key, None)
