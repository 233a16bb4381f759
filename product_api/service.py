# product_api/service.py
import math
import re
import uuid
from typing import Any, Dict, List, Optional

from .core import ProductIn, make_product
from .database import ProductStore
from .errors import not_found, validation_error

# Request logic for every product route. Each function takes the store
# explicitly; nothing here touches module-level state.

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

INFO: Dict[str, Any] = {
    "message": "Welcome to the Product API!",
    "endpoints": {
        "products": "/api/products",
        "search": "/api/products/search?q=laptop",
        "stats": "/api/products/stats",
        "singleProduct": "/api/products/:id",
    },
    "note": "Create, update and delete require the x-api-key header.",
}


def _dump(products: List[Any]) -> List[Dict[str, Any]]:
    return [p.to_dict() for p in products]


def coerce_int(raw: Any) -> Optional[int]:
    """Lenient integer parse: use the leading digits, ``None`` if there are none."""
    if raw is None:
        return None
    if isinstance(raw, int):
        return raw
    m = _LEADING_INT.match(str(raw))
    return int(m.group(1)) if m else None


# ---------------------------
# Read endpoints
# ---------------------------
def info_logic() -> Dict[str, Any]:
    return INFO


def list_products_logic(store: ProductStore, category: Optional[str] = None,
                        page: Any = 1, limit: Any = 10) -> Dict[str, Any]:
    products = store.list()
    if category:
        wanted = category.lower()
        products = [p for p in products if p.category.lower() == wanted]

    page_n = coerce_int(page)
    limit_n = coerce_int(limit)

    # no bounds checks; odd page/limit values just give odd slices
    if page_n is None or limit_n is None:
        data = []
    else:
        data = products[(page_n - 1) * limit_n:page_n * limit_n]

    total_pages = None
    if limit_n:
        total_pages = math.ceil(len(products) / limit_n)

    return {
        "total": len(products),
        "page": page_n,
        "limit": limit_n,
        "totalPages": total_pages,
        "data": _dump(data),
    }


def search_products_logic(store: ProductStore, q: Optional[str]) -> Dict[str, Any]:
    if not q:
        raise validation_error('Search query parameter "q" is required.')
    term = q.lower()
    results = [
        p for p in store.list()
        if term in p.name.lower() or term in p.description.lower()
    ]
    return {"query": q, "count": len(results), "data": _dump(results)}


def stats_logic(store: ProductStore) -> Dict[str, Any]:
    products = store.list()
    in_stock = 0
    by_category: Dict[str, int] = {}
    for p in products:
        if p.in_stock:
            in_stock += 1
        by_category[p.category] = by_category.get(p.category, 0) + 1
    return {
        "totalProducts": len(products),
        "inStock": in_stock,
        "outOfStock": len(products) - in_stock,
        "byCategory": by_category,
    }


def get_product_logic(store: ProductStore, product_id: str) -> Dict[str, Any]:
    p = store.get(product_id)
    if p is None:
        raise not_found(f"Product with ID {product_id} not found.")
    return p.to_dict()


# ---------------------------
# Mutating endpoints (auth and validation already passed)
# ---------------------------
def create_product_logic(store: ProductStore, payload: ProductIn) -> Dict[str, Any]:
    product = store.insert(make_product(str(uuid.uuid4()), payload))
    return {"message": "Product created successfully", "product": product.to_dict()}


def update_product_logic(store: ProductStore, product_id: str, payload: ProductIn) -> Dict[str, Any]:
    product = store.replace(product_id, make_product(product_id, payload))
    return {"message": "Product updated successfully", "product": product.to_dict()}


def delete_product_logic(store: ProductStore, product_id: str) -> Dict[str, Any]:
    removed = store.remove(product_id)
    return {"message": "Product deleted successfully", "product": removed.to_dict()}
