import math
from typing import Any, List, Optional

from pydantic import BaseModel, field_validator


def _coerce_id(value: Any) -> Optional[str]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float) and math.isfinite(value):
        return str(int(value)) if value.is_integer() else str(value)
    return None


def _coerce_id_list(value: Any) -> Optional[List[str]]:
    if not isinstance(value, list):
        return None
    ids = [_coerce_id(v) for v in value]
    return [i for i in ids if i is not None]


class ProductRef(BaseModel):
    id: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _lenient_id(cls, v: Any) -> Optional[str]:
        return _coerce_id(v) or None


class EventData(BaseModel):
    products: Optional[List[ProductRef]] = None
    id: Optional[str] = None

    @field_validator("products", mode="before")
    @classmethod
    def _lenient_products(cls, v: Any) -> Optional[list]:
        if not isinstance(v, list):
            return None
        return [p for p in v if isinstance(p, dict)]

    @field_validator("id", mode="before")
    @classmethod
    def _lenient_id(cls, v: Any) -> Optional[str]:
        # empty string means "no embedded id"
        return _coerce_id(v) or None


class Event(BaseModel):
    name: Optional[str] = None
    timestamp: Optional[float] = None
    productIds: Optional[List[str]] = None
    data: Optional[EventData] = None

    @field_validator("name", mode="before")
    @classmethod
    def _lenient_name(cls, v: Any) -> Optional[str]:
        if v is None or isinstance(v, str):
            return v
        if isinstance(v, (int, float, bool)):
            return str(v)
        return None

    @field_validator("timestamp", mode="before")
    @classmethod
    def _lenient_timestamp(cls, v: Any) -> Optional[float]:
        if v is None or isinstance(v, bool):
            return None
        try:
            ts = float(v)
        except (TypeError, ValueError, OverflowError):
            return None
        return ts if math.isfinite(ts) else None

    @field_validator("productIds", mode="before")
    @classmethod
    def _lenient_product_ids(cls, v: Any) -> Optional[List[str]]:
        return _coerce_id_list(v)

    @field_validator("data", mode="before")
    @classmethod
    def _lenient_data(cls, v: Any) -> Optional[dict]:
        return v if isinstance(v, dict) else None


class ScoredProduct(BaseModel):
    id: str
    score: float
