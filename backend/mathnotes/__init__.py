# backend/mathnotes/__init__.py
from .config import settings
from . import exceptions
from . import models
from . import schemas
from . import storage
from . import services

__version__ = "0.1.0"
