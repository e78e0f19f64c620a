"""Risk Configuration service implementations."""

from .config_store import ConfigStore
from .guide import (
    DEFAULT_GUIDE_PATH,
    DEFAULT_GUIDE_TITLE,
    GuideDocument,
    build_example_assessment,
    load_guide,
)

__all__ = [
    "ConfigStore",
    "DEFAULT_GUIDE_PATH",
    "DEFAULT_GUIDE_TITLE",
    "GuideDocument",
    "build_example_assessment",
    "load_guide",
]
