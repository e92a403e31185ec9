"""CineMatch client core: backend services, realtime chat sync and screen state."""
from .application import Application, firestore_source_factory
from .config import Settings, get_settings
from .events import FORCE_LOGOUT, EventEmitter
from .exceptions import CineMatchError, HttpError, InvalidArgumentError, RequestTimeoutError, TransportError

__version__ = "0.1.0"

__all__ = [
    "Application",
    "firestore_source_factory",
    "Settings",
    "get_settings",
    "FORCE_LOGOUT",
    "EventEmitter",
    "CineMatchError",
    "HttpError",
    "InvalidArgumentError",
    "RequestTimeoutError",
    "TransportError",
    "__version__",
]
