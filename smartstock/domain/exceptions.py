"""
도메인 계층 예외 정의

이 모듈은 예측 코어에서 발생할 수 있는 예외를 정의합니다.
빈 판매 이력이나 0으로 나누기는 예외가 아니라 정의된 폴백 정책으로
처리되므로, 여기 정의된 예외는 구조적으로 사용할 수 없는 입력과
외부 설명 서비스 실패에만 사용됩니다.
"""

from __future__ import annotations


class DomainError(Exception):
    """
    도메인 계층의 기본 예외 클래스.

    모든 도메인 예외는 이 클래스를 상속합니다.
    """

    pass


class ValidationError(DomainError):
    """
    입력 데이터의 구조가 잘못되었을 때 발생하는 예외.

    예: 판매 데이터프레임에 필수 컬럼 누락, 레코드가 매핑이 아님 등.
    음수 재고 같은 값의 이상은 검증하지 않습니다.
    """

    pass


class ExplanationError(DomainError):
    """
    자연어 설명 생성 실패 시 발생하는 예외.

    설명 서비스 내부에서만 발생하며, 서비스 경계에서
    고정 폴백 문구로 변환됩니다.
    """

    pass
