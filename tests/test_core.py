# tests/test_core.py
import pytest
from pydantic import ValidationError

from product_api.core import make_product, validate_product
from product_api.database import ProductStore, SEED_PRODUCTS
from product_api.errors import ApiError, ErrorKind
from product_api.models import Product
from product_api.security import check_api_key
from product_api.service import coerce_int, list_products_logic

VALID = {
    "name": "Lamp",
    "description": "Desk lamp",
    "price": 0,
    "category": "furniture",
    "inStock": False,
}


def _error_for(payload):
    with pytest.raises(ApiError) as exc:
        validate_product(payload)
    assert exc.value.kind is ErrorKind.VALIDATION
    return exc.value.message


def test_validate_accepts_valid_payload():
    p = validate_product(VALID)
    assert p.name == "Lamp"
    assert p.price == 0
    assert p.in_stock is False


@pytest.mark.parametrize("field, value, needle", [
    ("name", None, "name"),
    ("name", "   ", "name"),
    ("name", 12, "name"),
    ("description", "", "description"),
    ("description", ["x"], "description"),
    ("price", -5, "price"),
    ("price", "10", "price"),
    ("price", True, "price"),
    ("price", float("nan"), "price"),
    ("category", "", "category"),
    ("category", 3, "category"),
    ("inStock", "true", "inStock"),
    ("inStock", 1, "inStock"),
])
def test_validate_rejects_bad_field(field, value, needle):
    payload = dict(VALID)
    if value is None:
        del payload[field]
    else:
        payload[field] = value
    assert needle in _error_for(payload)


def test_validate_reports_first_failure_only():
    message = _error_for({"price": -1, "inStock": "no"})
    assert message == "Product name is required and must be a non-empty string."

    message = _error_for(dict(VALID, price=-1, inStock="no"))
    assert "price" in message


def test_validate_keeps_whitespace_only_description_and_category():
    p = validate_product(dict(VALID, description="   ", category="  "))
    product = make_product("abc", p)
    assert product.description == ""
    assert product.category == ""


def test_validate_non_object_payload():
    assert "name" in _error_for(["not", "an", "object"])


def test_make_product_trims_strings():
    p = validate_product(dict(VALID, name=" Lamp ", description=" Desk lamp\n", category=" Furniture "))
    product = make_product("x1", p)
    assert product.to_dict() == {
        "id": "x1",
        "name": "Lamp",
        "description": "Desk lamp",
        "price": 0,
        "category": "Furniture",
        "inStock": False,
    }


def test_check_api_key():
    check_api_key("secret", "secret")
    with pytest.raises(ApiError) as missing:
        check_api_key(None, "secret")
    assert missing.value.status_code == 401
    assert "required" in missing.value.message
    with pytest.raises(ApiError) as empty:
        check_api_key("", "secret")
    assert "required" in empty.value.message
    with pytest.raises(ApiError) as wrong:
        check_api_key("Secret", "secret")
    assert wrong.value.message == "Invalid API key provided."


def test_error_envelope():
    err = ApiError(ErrorKind.AUTHENTICATION, "nope")
    assert err.to_envelope() == {
        "error": {"name": "AuthenticationError", "message": "nope", "statusCode": 401}
    }
    assert ErrorKind.NOT_FOUND.status_code == 404
    assert ErrorKind.VALIDATION.status_code == 400
    assert ErrorKind.INTERNAL.status_code == 500


def _product(pid):
    return Product(id=pid, name=pid, description="d", price=1, category="c", in_stock=True)


def test_store_replace_keeps_position():
    store = ProductStore([_product("a"), _product("b"), _product("c")])
    store.replace("b", _product("b").model_copy(update={"name": "B2"}))
    assert [p.id for p in store.list()] == ["a", "b", "c"]
    assert store.get("b").name == "B2"


def test_store_remove_and_missing():
    store = ProductStore([_product("a"), _product("b")])
    assert store.remove("a").id == "a"
    assert store.get("a") is None
    assert len(store) == 1
    for op in (lambda: store.remove("a"), lambda: store.replace("a", _product("a"))):
        with pytest.raises(ApiError) as exc:
            op()
        assert exc.value.kind is ErrorKind.NOT_FOUND
        assert exc.value.message == "Product with ID a not found."


def test_store_list_is_a_copy():
    store = ProductStore.seeded()
    view = store.list()
    view.clear()
    assert len(store) == 5
    with pytest.raises(ValidationError):
        store.get("1").name = "changed"


def test_seeded_stores_are_independent():
    a, b = ProductStore.seeded(), ProductStore.seeded()
    a.remove("1")
    assert len(b) == 5
    assert len(SEED_PRODUCTS) == 5


@pytest.mark.parametrize("raw, expected", [
    ("3", 3), (" 7", 7), ("-2", -2), ("4abc", 4), ("1.9", 1), ("abc", None), ("", None), (None, None), (5, 5),
])
def test_coerce_int(raw, expected):
    assert coerce_int(raw) == expected


def test_negative_page_slices_from_the_end():
    store = ProductStore.seeded()
    body = list_products_logic(store, page="-1", limit="2")
    # [-4:-2] of five records
    assert [p["id"] for p in body["data"]] == ["2", "3"]
    assert body["totalPages"] == 3


def test_validate_accepts_integer_price_beyond_float_range():
    huge = 10 ** 400
    p = validate_product(dict(VALID, price=huge))
    assert p.price == huge
