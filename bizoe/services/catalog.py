from __future__ import annotations

import random
from typing import Iterable, List, Optional, Sequence

from bizoe.constants import (
    SORT_FEATURED,
    SORT_NAME,
    SORT_NEWEST,
    SORT_OPTIONS,
    SORT_PRICE_HIGH,
    SORT_PRICE_LOW,
)
from bizoe.db import mock_data
from bizoe.errors import ProductNotFound
from bizoe.store.models import Category, Product


def search_products(products: Iterable[Product], query: str) -> List[Product]:
    q = (query or "").strip().lower()
    if not q:
        return list(products)
    return [
        p
        for p in products
        if q in p.name.lower() or q in p.description.lower() or q in p.brand.lower()
    ]


def filter_by_category(
    products: Iterable[Product],
    slug: str,
    categories: Sequence[Category] = mock_data.CATEGORIES,
) -> List[Product]:
    category = next((c for c in categories if c.slug == slug), None) if slug else None
    if category is None:
        # unknown slug: no filter, like the catalog page
        return list(products)
    return [p for p in products if p.category_id == category.id]


def sort_products(
    products: Iterable[Product],
    sort_by: str = SORT_FEATURED,
    rng: Optional[random.Random] = None,
) -> List[Product]:
    out = list(products)
    if sort_by == SORT_PRICE_LOW:
        out.sort(key=lambda p: p.price)
    elif sort_by == SORT_PRICE_HIGH:
        out.sort(key=lambda p: p.price, reverse=True)
    elif sort_by == SORT_NAME:
        out.sort(key=lambda p: p.name.casefold())
    elif sort_by == SORT_NEWEST:
        # no creation dates in the catalog; shuffled like the storefront does
        (rng or random).shuffle(out)
    else:
        out.sort(key=lambda p: not p.featured)
    return out


def filter_products(
    products: Iterable[Product] = mock_data.PRODUCTS,
    search: str = "",
    category: str = "",
    sort_by: str = SORT_FEATURED,
    categories: Sequence[Category] = mock_data.CATEGORIES,
    rng: Optional[random.Random] = None,
) -> List[Product]:
    """Search, then category filter, then sort. Never raises on empty results."""
    if sort_by not in SORT_OPTIONS:
        sort_by = SORT_FEATURED
    result = search_products(products, search)
    result = filter_by_category(result, category, categories)
    return sort_products(result, sort_by, rng)


def get_product(product_id: str, products: Iterable[Product] = mock_data.PRODUCTS) -> Product:
    pid = (product_id or "").strip()
    for p in products:
        if p.id == pid:
            return p
    raise ProductNotFound(pid)


def related_products(product: Product, limit: int = 4) -> List[Product]:
    return [p for p in mock_data.PRODUCTS if p.category_id == product.category_id and p.id != product.id][:limit]
