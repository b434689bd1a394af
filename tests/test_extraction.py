from app.models import Event
from app.services.extraction import IdSource, extract_ids_tagged, extract_product_ids


def make(**fields):
    return Event.model_validate({"name": "ProductDetailsView", "timestamp": 0, **fields})


def test_explicit_product_ids_win():
    e = make(productIds=["a", "b"], data={"products": [{"id": "c"}], "id": "d"})
    assert extract_ids_tagged(e) == (IdSource.PRODUCT_IDS, ["a", "b"])


def test_falls_back_to_data_products():
    e = make(data={"products": [{"id": "c"}, {"id": "e"}], "id": "d"})
    assert extract_ids_tagged(e) == (IdSource.DATA_PRODUCTS, ["c", "e"])


def test_falls_back_to_data_id():
    assert extract_ids_tagged(make(data={"id": "d"})) == (IdSource.DATA_ID, ["d"])


def test_empty_sources_are_skipped():
    e = make(productIds=[], data={"products": [], "id": "d"})
    assert extract_ids_tagged(e) == (IdSource.DATA_ID, ["d"])


def test_products_without_ids_fall_through():
    e = make(data={"products": [{"sku": "x"}, "junk"], "id": "d"})
    assert extract_ids_tagged(e) == (IdSource.DATA_ID, ["d"])


def test_nothing_to_extract():
    assert extract_ids_tagged(make()) == (IdSource.NONE, [])
    assert extract_product_ids(make(data={"id": ""})) == []


def test_numeric_ids_are_stringified():
    assert extract_product_ids(make(productIds=[1, 2.0, 2.5, None, True, {"id": "x"}, "p"])) == [
        "1",
        "2",
        "2.5",
        "p",
    ]


def test_wrong_container_types_are_absent():
    e = make(productIds="p1", data={"products": {"id": "x"}, "id": 7})
    assert extract_ids_tagged(e) == (IdSource.DATA_ID, ["7"])
