from .core import *
from .env_var import *
from .logging import configure_logger
from .probe import NetworkProbe

__version__ = "0.1.0"
