from .api import ApiService, create_api_service
from .client import ApiClient, create_api_client
from .errors import MandiClientError, SessionError, StorageError
from .interceptors import InterceptorChain, authorize_request, bearer_token_interceptor, reject
from .mandi import MandiService
from .session import SessionManager
from .settings import ClientConfig, load_client_config
from .storage import FileStorage, MemoryStorage

__all__ = [
    "ApiClient",
    "ApiService",
    "ClientConfig",
    "FileStorage",
    "InterceptorChain",
    "MandiClientError",
    "MandiService",
    "MemoryStorage",
    "SessionError",
    "SessionManager",
    "StorageError",
    "authorize_request",
    "bearer_token_interceptor",
    "create_api_client",
    "create_api_service",
    "load_client_config",
    "reject",
]
