import math

import pytest

from purchase_insights.foundation import PRICE_BAND_LABELS, PRICE_BANDS, classify_price


def test_table_has_ten_bands_in_fixed_order():
    assert len(PRICE_BANDS) == 10
    assert PRICE_BAND_LABELS == (
        "2만원 이하",
        "2만원 초과 ~ 3만원",
        "3만원 초과 ~ 4만원",
        "4만원 초과 ~ 5만원",
        "5만원 초과 ~ 6만원",
        "6만원 초과 ~ 7만원",
        "7만원 초과 ~ 8만원",
        "8만원 초과 ~ 9만원",
        "9만원 초과 ~ 10만원 미만",
        "10만원 이상",
    )
    assert PRICE_BANDS[-1].upper == math.inf


@pytest.mark.parametrize(
    "price, expected_index",
    [
        (0, 0),
        (20000, 0),
        (20001, 1),
        (30000, 1),
        (30001, 2),
        (50000, 3),
        (90000, 7),
        (90001, 8),
        (99999, 8),
        (100000, 9),
        (5_000_000, 9),
    ],
)
def test_classify_price_boundaries(price, expected_index):
    assert classify_price(price) == expected_index


def test_classified_band_contains_price():
    for price in range(0, 120001, 250):
        band = PRICE_BANDS[classify_price(price)]
        assert band.contains(price), (price, band)


def test_exactly_one_band_contains_each_integer_price():
    for price in (0, 1, 19999, 20000, 20001, 99998, 99999, 100000, 100001):
        matches = [band for band in PRICE_BANDS if band.contains(price)]
        assert len(matches) == 1, price


def test_negative_price_is_rejected():
    with pytest.raises(ValueError):
        classify_price(-1)
