from .settings import Settings
from .logging_setup import configure_logging
