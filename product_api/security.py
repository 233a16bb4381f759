# product_api/security.py
import hmac
from typing import Optional

from .errors import authentication_error

API_KEY_HEADER = "x-api-key"


def check_api_key(header_value: Optional[str], expected: str) -> None:
    """Gate for mutating routes; raises AuthenticationError unless the key matches."""
    if not header_value:
        raise authentication_error(f"API key is required. Please provide {API_KEY_HEADER} header.")
    if not hmac.compare_digest(header_value.encode("utf-8"), expected.encode("utf-8")):
        raise authentication_error("Invalid API key provided.")
