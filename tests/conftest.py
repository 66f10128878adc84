import os
import sys
from pathlib import Path

import pandas as pd
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from smartstock.domain.models import Product, SalesRecord


def pytest_configure(config):
    """pytest 초기화 시점에 실행되어 테스트 수집 전에 환경을 준비합니다.

    Gemini 호출이 실제 네트워크로 나가지 않도록 API 키를 제거합니다.
    """
    os.environ.pop("GEMINI_API_KEY", None)


@pytest.fixture
def coffee() -> Product:
    return Product(
        id="P001",
        name="Organic Coffee Beans",
        category="Grocery",
        current_stock=45,
        min_stock_level=20,
        lead_time_days=3,
        unit_price=18.5,
        unit="kg",
    )


@pytest.fixture
def make_sales():
    """최신순 판매량 리스트로 SalesRecord 리스트를 만드는 팩토리.

    ``units[0]``이 ``end`` 날짜, ``units[1]``이 그 전날 ... 입니다.
    """

    def _make(units, product_id="P001", end="2024-03-31"):
        end_ts = pd.Timestamp(end)
        return [
            SalesRecord(
                product_id=product_id,
                date=end_ts - pd.Timedelta(days=i),
                units_sold=u,
            )
            for i, u in enumerate(units)
        ]

    return _make
