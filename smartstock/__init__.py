"""
SmartStock 재고 예측 코어

판매 이력과 시뮬레이션 파라미터로부터 재입고 추천량, 추세, 이상 징후를
계산하는 순수 계산 패키지입니다.
- 도메인 모델과 계산 로직 분리
- pandas 기반 판매 이력 집계
- 외부 설명 서비스(Gemini)는 선택 사항
"""

from __future__ import annotations

__version__ = "1.0.0"
