from sweetshop.client.api import ApiClientError, SweetShopClient
from sweetshop.client.session import SessionStore

__all__ = [
    "ApiClientError",
    "SessionStore",
    "SweetShopClient",
]
