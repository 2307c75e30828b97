from .loader import load_settings
from .models import DigestConfig, DigestSettings, TreeMode, normalize_extension

__all__ = [
    "DigestConfig",
    "DigestSettings",
    "TreeMode",
    "load_settings",
    "normalize_extension",
]
