"""
SQLite key/value 저장소

WAL 모드 단일 테이블 저장소. 스냅샷 JSON과 bin ID 캐시 보관용.
IKeyValueStore Protocol 준수 (동기 호출).
"""

import logging
import sqlite3
from pathlib import Path

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS kv_store (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
)
"""


class SQLiteKeyValueStore:
    """SQLite key/value 저장소

    Args:
        db_path: DB 파일 경로 (":memory:" 허용)

    사용 예시:
    ```python
    kv = SQLiteKeyValueStore(Paths.LEDGER_DB)
    kv.set("slide_app_data", json.dumps(snapshot))
    raw = kv.get("slide_app_data")
    kv.close()
    ```
    """

    def __init__(self, db_path: Path | str):
        self.db_path = str(db_path)

        if self.db_path != ":memory:":
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

        self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.execute("PRAGMA busy_timeout=30000")
        self._conn.execute(SCHEMA)
        self._conn.commit()

        logger.info(f"SQLite key/value 저장소 연결: {self.db_path}")

    def get(self, key: str) -> str | None:
        row = self._conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        with self._conn:
            self._conn.execute(
                """
                INSERT INTO kv_store (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = strftime('%Y-%m-%dT%H:%M:%fZ', 'now')
                """,
                (key, value),
            )

    def remove(self, key: str) -> None:
        with self._conn:
            self._conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))

    def keys(self) -> list[str]:
        rows = self._conn.execute("SELECT key FROM kv_store ORDER BY key").fetchall()
        return [row[0] for row in rows]

    def close(self) -> None:
        """연결 종료"""
        self._conn.close()
        logger.debug(f"SQLite key/value 저장소 종료: {self.db_path}")
