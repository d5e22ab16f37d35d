from .app import create_app
from .settings import AdminSettings

__all__ = ["create_app", "AdminSettings"]
