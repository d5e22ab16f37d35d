from .contracts import SECRET_PLACEHOLDER, StoreState, Template, TransmissionConfig
from .store import OperatorStore, StoreBackend, InMemoryBackend, JsonFileBackend
from .service import ConfigService
from .routes import router as config_router

__all__ = [
    "SECRET_PLACEHOLDER",
    "StoreState",
    "Template",
    "TransmissionConfig",
    "OperatorStore",
    "StoreBackend",
    "InMemoryBackend",
    "JsonFileBackend",
    "ConfigService",
    "config_router",
]
