# Infrastructure Adapters
from .bundled_packs import BundledPackSource

__all__ = ["BundledPackSource"]
