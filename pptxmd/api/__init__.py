# pptxmd conversion API

from .config import get_settings, Settings
from .main import app, create_app

__all__ = [
    'app',
    'create_app',
    'get_settings',
    'Settings',
]
