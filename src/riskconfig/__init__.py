"""Risk Configuration API - keyed JSON configuration store over HTTP."""

from .interfaces import ConfigRecord, IConfigStore, utc_now
from .services import ConfigStore

__version__ = "0.1.0"

__all__ = ["ConfigRecord", "ConfigStore", "IConfigStore", "utc_now", "__version__"]
