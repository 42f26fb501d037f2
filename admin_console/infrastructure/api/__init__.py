from .api_client import ApiClient
from .resource_gateway import HttpResourceGateway

__all__ = [
    "ApiClient",
    "HttpResourceGateway",
]
