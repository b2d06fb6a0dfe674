"""
API 라우트 패키지

각 기능별 라우터 모듈:
- health: 헬스 체크
- players: 로스터 및 이월 잔액 납부
- weeks: 주간 장부 편집/마감
- summary: 누적 수금 현황
- sync: 클라우드 동기화 및 백업
"""
