"""
이상 징후 감지 테스트

재고 부족(DROP), 판매 급증(SPIKE), id 안정성, 빈 과거 구간 정책을 검증합니다.
"""
from __future__ import annotations

import dataclasses

import pandas as pd

from smartstock.analytics.anomalies import SPIKE_DESCRIPTION, detect_anomalies
from smartstock.core.config import AnomalyConfig
from smartstock.domain.models import AnomalyType, Severity

AS_OF = "2024-03-31"


# ============================================================
# 재고 부족
# ============================================================

def test_low_stock_anomaly(coffee):
    low = dataclasses.replace(coffee, current_stock=5, min_stock_level=20)

    anomalies = detect_anomalies([low], [], as_of=AS_OF)

    assert len(anomalies) == 1
    anomaly = anomalies[0]
    assert anomaly.id == "AN-P001-LOW"
    assert anomaly.type == AnomalyType.DROP
    assert anomaly.severity == Severity.CRITICAL
    assert "5.00" in anomaly.description
    assert anomaly.description == "Extreme low stock alert. Currently at 5.00 kg."
    assert anomaly.date == pd.Timestamp("2024-03-31")


def test_low_stock_threshold_is_inclusive(coffee):
    """정확히 절반이면 발생, 그보다 많으면 발생하지 않음"""
    at_half = dataclasses.replace(coffee, current_stock=10, min_stock_level=20)
    above = dataclasses.replace(coffee, id="P002", current_stock=10.5, min_stock_level=20)

    anomalies = detect_anomalies([at_half, above], [], as_of=AS_OF)

    assert [a.id for a in anomalies] == ["AN-P001-LOW"]


def test_low_stock_description_keeps_fraction(coffee):
    low = dataclasses.replace(coffee, current_stock=2.125, min_stock_level=20)

    anomaly = detect_anomalies([low], [], as_of=AS_OF)[0]

    assert "2.13 kg" in anomaly.description


# ============================================================
# 판매 급증
# ============================================================

def test_spike_anomaly(coffee, make_sales):
    """최근 3건 평균 50 > 과거 10건 평균 10 × 1.8"""
    anomalies = detect_anomalies([coffee], make_sales([50, 50, 50] + [10] * 10), as_of=AS_OF)

    assert len(anomalies) == 1
    anomaly = anomalies[0]
    assert anomaly.id == "AN-P001-SPIKE"
    assert anomaly.type == AnomalyType.SPIKE
    assert anomaly.severity == Severity.WARNING
    assert anomaly.description == SPIKE_DESCRIPTION
    assert "80%" in anomaly.description


def test_spike_threshold_is_strict(coffee, make_sales):
    """정확히 1.8배(18 vs 10)는 급증이 아님"""
    anomalies = detect_anomalies([coffee], make_sales([18, 18, 18] + [10] * 10), as_of=AS_OF)

    assert anomalies == []


def test_spike_ignores_records_beyond_history_window(coffee, make_sales):
    """14번째 이후 기록은 과거 평균에 포함되지 않음"""
    units = [30, 30, 30] + [10] * 10 + [1000] * 5

    anomalies = detect_anomalies([coffee], make_sales(units), as_of=AS_OF)

    assert [a.id for a in anomalies] == ["AN-P001-SPIKE"]


def test_spike_uses_most_recent_dates(coffee, make_sales):
    """입력 순서와 무관하게 날짜 기준 최근 3건을 사용"""
    records = make_sales([50, 50, 50] + [10] * 10)
    reversed_input = list(reversed(records))

    anomalies = detect_anomalies([coffee], reversed_input, as_of=AS_OF)

    assert [a.id for a in anomalies] == ["AN-P001-SPIKE"]


def test_spike_skipped_without_history_by_default(coffee, make_sales):
    """과거 구간이 비어 있으면 근거 부족으로 건너뜀"""
    anomalies = detect_anomalies([coffee], make_sales([50, 50, 50]), as_of=AS_OF)

    assert anomalies == []


def test_spike_without_history_legacy_policy(coffee, make_sales):
    """require_spike_history=False면 과거 평균 0으로 보고 급증 판정"""
    cfg = AnomalyConfig(require_spike_history=False)

    anomalies = detect_anomalies([coffee], make_sales([50, 50, 50]), as_of=AS_OF, config=cfg)

    assert [a.id for a in anomalies] == ["AN-P001-SPIKE"]


def test_no_sales_never_spikes_even_with_legacy_policy(coffee):
    cfg = AnomalyConfig(require_spike_history=False)

    assert detect_anomalies([coffee], [], as_of=AS_OF, config=cfg) == []


# ============================================================
# 공통 속성
# ============================================================

def test_product_can_trigger_both_checks(coffee, make_sales):
    low = dataclasses.replace(coffee, current_stock=1)

    anomalies = detect_anomalies([low], make_sales([50, 50, 50] + [10] * 10), as_of=AS_OF)

    assert [a.id for a in anomalies] == ["AN-P001-LOW", "AN-P001-SPIKE"]


def test_repeated_runs_produce_identical_anomalies(coffee, make_sales):
    low = dataclasses.replace(coffee, current_stock=1)
    sales = make_sales([50, 50, 50] + [10] * 10)

    first = detect_anomalies([low], sales, as_of=AS_OF)
    second = detect_anomalies([low], sales, as_of=AS_OF)

    assert first == second


def test_anomalies_follow_product_order(coffee, make_sales):
    milk = dataclasses.replace(coffee, id="P002", current_stock=1)
    bread = dataclasses.replace(coffee, id="P003", current_stock=1)

    anomalies = detect_anomalies([bread, milk], [], as_of=AS_OF)

    assert [a.product_id for a in anomalies] == ["P003", "P002"]


def test_default_date_is_today(coffee):
    low = dataclasses.replace(coffee, current_stock=0)

    anomaly = detect_anomalies([low], [])[0]

    assert anomaly.date == pd.Timestamp.today().normalize()


def test_anomaly_to_dict(coffee):
    low = dataclasses.replace(coffee, current_stock=0)

    payload = detect_anomalies([low], [], as_of=AS_OF)[0].to_dict()

    assert payload == {
        "id": "AN-P001-LOW",
        "productId": "P001",
        "type": "DROP",
        "severity": "CRITICAL",
        "description": "Extreme low stock alert. Currently at 0.00 kg.",
        "date": "2024-03-31",
    }
