# product_api/core.py
import math
from pydantic import BaseModel
from typing import Any, Dict, Union

from .errors import validation_error
from .models import Product


class ProductIn(BaseModel):
    name: str
    description: str
    price: Union[int, float]
    category: str
    in_stock: bool


# ---------------------------
# Validation rules (first failure wins)
# ---------------------------
def _is_number(value: Any) -> bool:
    # bool is an int subclass, but JSON true/false are not prices
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not isinstance(value, float) or math.isfinite(value)


def validate_product(payload: Any) -> ProductIn:
    """Check a decoded request body and return it as a ``ProductIn``.

    Raises a ValidationError naming the first field that breaks its rule.
    Anything that is not a JSON object is checked as an empty one.
    """
    data: Dict[str, Any] = payload if isinstance(payload, dict) else {}

    name = data.get("name")
    if not isinstance(name, str) or name.strip() == "":
        raise validation_error("Product name is required and must be a non-empty string.")

    # whitespace-only descriptions are accepted, unlike names
    description = data.get("description")
    if not isinstance(description, str) or description == "":
        raise validation_error("Product description is required and must be a string.")

    price = data.get("price")
    if not _is_number(price) or price < 0:
        raise validation_error("Product price is required and must be a non-negative number.")

    category = data.get("category")
    if not isinstance(category, str) or category == "":
        raise validation_error("Product category is required and must be a string.")

    in_stock = data.get("inStock")
    if not isinstance(in_stock, bool):
        raise validation_error("Product inStock status is required and must be a boolean.")

    return ProductIn(
        name=name,
        description=description,
        price=price,
        category=category,
        in_stock=in_stock,
    )


def make_product(product_id: str, p: ProductIn) -> Product:
    return Product(
        id=product_id,
        name=p.name.strip(),
        description=p.description.strip(),
        price=p.price,
        category=p.category.strip(),
        in_stock=p.in_stock,
    )
