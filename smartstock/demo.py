"""샘플 상품 카탈로그와 판매 이력 생성기.

신규 소매점 계정에 채워 넣는 데모 데이터입니다. 판매 이력은
시드 고정 난수로 생성되어 같은 시드/기준일이면 항상 같은 결과를 냅니다.
"""

from __future__ import annotations

from datetime import date
from typing import Optional, Union

import numpy as np
import pandas as pd

from .domain.models import Product, to_day
from .domain.normalization import normalize_sales

PRODUCTS: tuple[Product, ...] = (
    Product(
        id="P001",
        name="Organic Coffee Beans",
        category="Grocery",
        current_stock=45,
        min_stock_level=20,
        lead_time_days=3,
        unit_price=18.50,
        unit="kg",
        supplier_name="BeanDirect Co.",
        supplier_phone="1234567890",
    ),
    Product(
        id="P002",
        name="Oat Milk - Barista Edition",
        category="Dairy",
        current_stock=12,
        min_stock_level=30,
        lead_time_days=2,
        unit_price=4.20,
        unit="pcs",
        supplier_name="PureDairy Ltd",
        supplier_phone="0987654321",
    ),
    Product(
        id="P003",
        name="Sourdough Bread",
        category="Bakery",
        current_stock=15,
        min_stock_level=10,
        lead_time_days=1,
        unit_price=6.00,
        unit="pcs",
        supplier_name="Local Oven",
        supplier_phone="1122334455",
    ),
    Product(
        id="P004",
        name="Avocado (Bulk Pack)",
        category="Produce",
        current_stock=80,
        min_stock_level=25,
        lead_time_days=4,
        unit_price=12.00,
        unit="pack",
        supplier_name="GreenEarth Farms",
        supplier_phone="5566778899",
    ),
    Product(
        id="P005",
        name="Basmati Rice",
        category="Grocery",
        current_stock=100,
        min_stock_level=20,
        lead_time_days=3,
        unit_price=3.50,
        unit="kg",
        supplier_name="Global Grains",
        supplier_phone="1231231234",
    ),
)

# 상품별 기본 일 판매량 (지정되지 않은 상품은 10)
BASE_RATES = {"P001": 8, "P002": 12}

# P001은 5일 전 프로모션으로 판매가 튑니다
PROMO_PRODUCT_ID = "P001"
PROMO_DAYS_AGO = 5
PROMO_BONUS = 25


def generate_sales_history(
    today: Union[date, pd.Timestamp, str, None] = None,
    *,
    days: int = 30,
    seed: int = 42,
    products: Optional[tuple[Product, ...]] = None,
) -> pd.DataFrame:
    """상품별 ``days + 1``일치 일 판매 기록을 생성합니다.

    일 판매량 = max(0, 기본량 + 변동(-2~2) + 10일마다 1씩 증가하는 추세 + 프로모션 보너스)

    Returns:
        정규화된 판매 DataFrame (상품별 날짜 오름차순)
    """
    end = to_day(today if today is not None else pd.Timestamp.today())
    rng = np.random.default_rng(seed)

    rows = []
    for product in products or PRODUCTS:
        base_rate = BASE_RATES.get(product.id, 10)
        for i in range(days, -1, -1):
            variance = int(rng.integers(-2, 3))
            trend = (days - i) // 10
            is_promo = product.id == PROMO_PRODUCT_ID and i == PROMO_DAYS_AGO
            bonus = PROMO_BONUS if is_promo else 0
            rows.append(
                {
                    "product_id": product.id,
                    "date": end - pd.Timedelta(days=i),
                    "units_sold": max(0, base_rate + variance + trend + bonus),
                    "is_promotion": is_promo,
                }
            )

    return normalize_sales(pd.DataFrame(rows))
