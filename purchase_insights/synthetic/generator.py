from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
import math
import random
from typing import List, Optional, Sequence

from purchase_insights.foundation.price_bands import PRICE_BANDS
from purchase_insights.foundation.records import Customer, Dataset, Product, Purchase

_SURNAMES = ("김", "이", "박", "최", "정", "강", "조", "윤", "장", "임")
_GIVEN_NAMES = (
    "민준", "서연", "도윤", "지우", "하준", "서윤", "은우", "지유", "시우", "하은",
    "철수", "영희", "지호", "수아", "예준", "채원",
)
_PRODUCT_KINDS = (
    "머그컵", "텀블러", "원두", "드립백", "그라인더", "케틀", "필터", "드리퍼",
    "에스프레소 머신", "선물 세트",
)

# Highest band has no upper bound; sample it up to this price.
_TOP_BAND_CEILING = 300000


@dataclass(frozen=True)
class SyntheticConfig:
    """Configuration for synthetic purchase datasets.

    Attributes
    ----------
    n_customers: Number of customers to generate.
    n_products: Number of catalogue products to generate.
    start: First possible purchase date.
    end: Last possible purchase date (inclusive).
    purchases_per_customer: Average purchase records per customer.
    quantity_mean: Average quantity per purchase.
    inactive_share: Fraction of customers that never purchase.
    seed: Optional RNG seed for reproducibility.
    """

    n_customers: int = 50
    n_products: int = 30
    start: date = date(2024, 1, 1)
    end: date = date(2024, 12, 31)
    purchases_per_customer: float = 4.0
    quantity_mean: float = 1.5
    inactive_share: float = 0.1
    seed: Optional[int] = None


def generate_customers(n: int, *, seed: Optional[int] = None) -> List[Customer]:
    """Generate ``n`` customers with ids ``C-1`` .. ``C-n``."""

    if n <= 0:
        return []
    rng = random.Random(seed)
    return [
        Customer(
            id=f"C-{i + 1}",
            name=rng.choice(_SURNAMES) + rng.choice(_GIVEN_NAMES),
        )
        for i in range(n)
    ]


def _sample_price(rng: random.Random) -> int:
    # Uniform over bands first so every band is populated in larger catalogues.
    band = rng.choice(PRICE_BANDS)
    low = int(band.lower) if band.lower_inclusive else int(band.lower) + 1
    high = _TOP_BAND_CEILING if math.isinf(band.upper) else int(band.upper)
    price = rng.randint(low, high)
    # Round to the nearest 100 while staying inside the band.
    rounded = int(round(price, -2))
    return rounded if low <= rounded <= high else price


def generate_products(n: int, *, seed: Optional[int] = None) -> List[Product]:
    """Generate ``n`` products with prices spread across all price bands."""

    if n <= 0:
        return []
    rng = random.Random(seed)
    products: List[Product] = []
    for i in range(n):
        kind = rng.choice(_PRODUCT_KINDS)
        product_id = f"P-{i + 1}"
        products.append(
            Product(
                id=product_id,
                name=f"{kind} {i + 1}",
                price=_sample_price(rng),
                thumbnail=f"https://picsum.photos/seed/{product_id}/200",
            )
        )
    return products


def _purchase_count(rng: random.Random, lam: float) -> int:
    # Poisson draw via Knuth's algorithm; lambdas here are small.
    if lam <= 0:
        return 0
    L = math.exp(-lam)
    k = 0
    p = 1.0
    while p > L:
        k += 1
        p *= rng.random()
    return max(0, k - 1)


def _sample_quantity(rng: random.Random, mean_q: float) -> int:
    # Discretized log-normal for positive integer quantities
    q = max(1.0, rng.lognormvariate(mu=math.log(max(mean_q, 0.1)), sigma=0.5))
    return max(1, int(round(q)))


def generate_purchases(
    customers: Sequence[Customer],
    products: Sequence[Product],
    start: date,
    end: date,
    *,
    purchases_per_customer: float = 4.0,
    quantity_mean: float = 1.5,
    inactive_share: float = 0.1,
    seed: Optional[int] = None,
) -> List[Purchase]:
    """Generate purchases between ``start`` and ``end`` (inclusive).

    Every purchase references an existing customer and product, so the
    result always passes the integrity checks of the queries.
    """

    if start > end:
        raise ValueError("start date must be <= end date")
    if not products:
        return []

    rng = random.Random(seed)
    total_days = (end - start).days + 1
    purchases: List[Purchase] = []
    seq = 1

    for customer in customers:
        if rng.random() < inactive_share:
            continue
        for _ in range(_purchase_count(rng, purchases_per_customer)):
            product = rng.choice(products)
            purchases.append(
                Purchase(
                    id=f"O-{seq}",
                    customer_id=customer.id,
                    product_id=product.id,
                    quantity=_sample_quantity(rng, quantity_mean),
                    date=start + timedelta(days=rng.randrange(total_days)),
                )
            )
            seq += 1

    purchases.sort(key=lambda p: (p.date, p.customer_id, p.id))
    return purchases


def generate_dataset(config: Optional[SyntheticConfig] = None) -> Dataset:
    """Generate a complete, referentially consistent dataset."""

    config = config or SyntheticConfig()
    rng = random.Random(config.seed)
    # Independent sub-seeds keep each collection stable when another changes size.
    customer_seed, product_seed, purchase_seed = (rng.randrange(2**32) for _ in range(3))

    customers = generate_customers(config.n_customers, seed=customer_seed)
    products = generate_products(config.n_products, seed=product_seed)
    purchases = generate_purchases(
        customers,
        products,
        config.start,
        config.end,
        purchases_per_customer=config.purchases_per_customer,
        quantity_mean=config.quantity_mean,
        inactive_share=config.inactive_share,
        seed=purchase_seed,
    )
    return Dataset(
        customers=tuple(customers),
        products=tuple(products),
        purchases=tuple(purchases),
    )
