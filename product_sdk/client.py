# product_sdk/client.py
import requests
import httpx
from typing import Any, Dict, Optional


class ProductApiError(Exception):
    """Raised for any non-2xx response; mirrors the server's error envelope."""

    def __init__(self, name: str, message: str, status_code: int):
        super().__init__(f"{name} ({status_code}): {message}")
        self.name = name
        self.message = message
        self.status_code = status_code


def _raise_for_error(r) -> Any:
    if r.status_code < 400:
        return r.json()
    try:
        err = r.json()["error"]
        name, message, status = err["name"], err["message"], err["statusCode"]
    except (ValueError, KeyError, TypeError):
        raise ProductApiError("HTTPError", r.text, r.status_code)
    raise ProductApiError(name, message, status)


class ProductClient:
    def __init__(self, base_url: str = "http://localhost:3000", api_key: Optional[str] = None,
                 timeout: int = 10, session=None):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.api_key = api_key
        if api_key:
            self.session.headers.update({"x-api-key": api_key})

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    @staticmethod
    def _product_body(name: str, description: str, price: float, category: str,
                      in_stock: bool) -> Dict[str, Any]:
        return {
            "name": name,
            "description": description,
            "price": price,
            "category": category,
            "inStock": in_stock,
        }

    def info(self):
        r = self.session.get(self._url("/"), timeout=self.timeout)
        return _raise_for_error(r)

    # Products (read)
    def list_products(self, category: Optional[str] = None, page: Optional[int] = None,
                      limit: Optional[int] = None):
        params = {}
        if category:
            params["category"] = category
        if page is not None:
            params["page"] = page
        if limit is not None:
            params["limit"] = limit
        r = self.session.get(self._url("/api/products"), params=params, timeout=self.timeout)
        return _raise_for_error(r)

    def search_products(self, q: str):
        r = self.session.get(self._url("/api/products/search"), params={"q": q}, timeout=self.timeout)
        return _raise_for_error(r)

    def stats(self):
        r = self.session.get(self._url("/api/products/stats"), timeout=self.timeout)
        return _raise_for_error(r)

    def get_product(self, product_id: str):
        r = self.session.get(self._url(f"/api/products/{product_id}"), timeout=self.timeout)
        return _raise_for_error(r)

    # Products (write, need api_key)
    def create_product(self, name: str, description: str, price: float, category: str,
                       in_stock: bool = True):
        body = self._product_body(name, description, price, category, in_stock)
        r = self.session.post(self._url("/api/products"), json=body, timeout=self.timeout)
        return _raise_for_error(r)

    def update_product(self, product_id: str, name: str, description: str, price: float,
                       category: str, in_stock: bool = True):
        body = self._product_body(name, description, price, category, in_stock)
        r = self.session.put(self._url(f"/api/products/{product_id}"), json=body, timeout=self.timeout)
        return _raise_for_error(r)

    def delete_product(self, product_id: str):
        r = self.session.delete(self._url(f"/api/products/{product_id}"), timeout=self.timeout)
        return _raise_for_error(r)

    # Async list (example)
    async def list_products_async(self, category: Optional[str] = None, transport=None):
        params = {"category": category} if category else {}
        async with httpx.AsyncClient(timeout=self.timeout, transport=transport) as client:
            r = await client.get(self._url("/api/products"), params=params)
            return _raise_for_error(r)
