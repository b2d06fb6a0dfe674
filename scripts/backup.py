"""
장부 백업/복원 도구

사용법:
    python -m scripts.backup export --output backup.json
    python -m scripts.backup import backup.json
    python -m scripts.backup push
    python -m scripts.backup pull
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# 프로젝트 루트를 Python 경로에 추가
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from core.bootstrap import build_runtime
from core.ledger.store import LedgerStore
from core.logging import setup_logging

logger = logging.getLogger(__name__)

COMMANDS = ("export", "import", "push", "pull")


async def run_command(store: LedgerStore, command: str, path: Path | None = None) -> int:
    """명령 실행

    Returns:
        종료 코드 (0: 성공, 1: 실패)
    """
    if command == "export":
        content = store.export_json()
        if path is None:
            print(content)
        else:
            path.write_text(content, encoding="utf-8")
            logger.info(f"백업 저장: {path} (주간 {store.week_count}개, 플레이어 {store.player_count}명)")
        return 0

    if command == "import":
        if path is None or not path.exists():
            logger.error(f"백업 파일을 찾을 수 없습니다: {path}")
            return 1
        if not store.import_json(path.read_text(encoding="utf-8")):
            logger.error(f"백업 파일 형식 오류: {path}")
            return 1
        return 0

    if command == "push":
        result = await store.force_sync_to_cloud()
    elif command == "pull":
        result = await store.sync_from_cloud()
    else:
        logger.error(f"알 수 없는 명령: {command}")
        return 1

    if not result.success:
        logger.error(f"클라우드 {command} 실패: {result.error}")
        return 1
    return 0


async def main(command: str, path: Path | None) -> int:
    runtime = build_runtime()
    try:
        return await run_command(runtime.store, command, path)
    finally:
        await runtime.aclose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Slide 장부 백업/복원")
    parser.add_argument("command", choices=COMMANDS, help="실행할 명령")
    parser.add_argument("path", nargs="?", type=Path, default=None, help="가져올 백업 파일 (import)")
    parser.add_argument("--output", "-o", type=Path, default=None, help="백업 저장 경로 (export)")
    args = parser.parse_args()

    setup_logging("backup")
    exit_code = asyncio.run(main(args.command, args.output or args.path))
    sys.exit(exit_code)
