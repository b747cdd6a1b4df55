import hmac
import math
from dataclasses import dataclass
from typing import Any, Optional

from .models import Product

FIELDS_REQUIRED = "All product fields are required."
PRICE_NOT_POSITIVE = "Price must be a positive number."


def validate_product(payload: Any) -> Optional[str]:
    """Return None when the payload may become a product, else the rejection reason."""
    if not isinstance(payload, dict):
        payload = {}
    for key in ("name", "description", "category"):
        if not payload.get(key):
            return FIELDS_REQUIRED
    # a zero or negative price is present but wrong, so it falls through to the price rule
    if payload.get("price") in (None, ""):
        return FIELDS_REQUIRED
    # inStock only has to be present; false is a real answer
    if "inStock" not in payload:
        return FIELDS_REQUIRED

    price = payload["price"]
    if isinstance(price, bool) or not isinstance(price, (int, float)) or price <= 0:
        return PRICE_NOT_POSITIVE
    # JSON numbers such as 1e999 decode to inf, and NaN compares false to everything
    if isinstance(price, float) and not math.isfinite(price):
        return PRICE_NOT_POSITIVE
    return None


def authenticate(presented: Optional[str], secret: Optional[str]) -> bool:
    if not presented or not secret:
        return False
    return hmac.compare_digest(presented.encode(), secret.encode())


def _parse_bound(raw: Optional[str], key: str) -> Optional[float]:
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{key} must be a number.")
    if math.isnan(value):
        raise ValueError(f"{key} must be a number.")
    return value


@dataclass(frozen=True)
class ProductFilter:
    category: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    name: Optional[str] = None

    @classmethod
    def from_params(cls, category: Optional[str] = None, min_price: Optional[str] = None,
                    max_price: Optional[str] = None, name: Optional[str] = None) -> "ProductFilter":
        """Build a filter from raw list query values; empty values are ignored.

        Raises ValueError when minPrice or maxPrice is not a number.
        """
        return cls(
            category=category or None,
            min_price=_parse_bound(min_price, "minPrice"),
            max_price=_parse_bound(max_price, "maxPrice"),
            name=name or None,
        )

    def matches(self, product: Product) -> bool:
        if self.category is not None and product.category.lower() != self.category.lower():
            return False
        if self.min_price is not None and product.price < self.min_price:
            return False
        if self.max_price is not None and product.price > self.max_price:
            return False
        if self.name is not None and self.name.lower() not in product.name.lower():
            return False
        return True
