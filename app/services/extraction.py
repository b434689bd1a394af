from enum import Enum
from typing import Callable, List, Tuple

from app.models import Event


class IdSource(str, Enum):
    PRODUCT_IDS = "productIds"
    DATA_PRODUCTS = "data.products"
    DATA_ID = "data.id"
    NONE = "none"


def _from_product_ids(event: Event) -> List[str]:
    return list(event.productIds or [])


def _from_data_products(event: Event) -> List[str]:
    if event.data is None or not event.data.products:
        return []
    return [p.id for p in event.data.products if p.id is not None]


def _from_data_id(event: Event) -> List[str]:
    if event.data is None or not event.data.id:
        return []
    return [event.data.id]


# priority order: the first extractor yielding a non-empty list wins
EXTRACTORS: Tuple[Tuple[IdSource, Callable[[Event], List[str]]], ...] = (
    (IdSource.PRODUCT_IDS, _from_product_ids),
    (IdSource.DATA_PRODUCTS, _from_data_products),
    (IdSource.DATA_ID, _from_data_id),
)


def extract_ids_tagged(event: Event) -> Tuple[IdSource, List[str]]:
    for source, extractor in EXTRACTORS:
        ids = extractor(event)
        if ids:
            return source, ids
    return IdSource.NONE, []


def extract_product_ids(event: Event) -> List[str]:
    return extract_ids_tagged(event)[1]
