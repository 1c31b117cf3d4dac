"""Discovery module - application executable and bundled packages."""

from .app_locator import find_candidates, locate_executable
from .packages import PackageContext, discover_packages

__all__ = [
    "find_candidates",
    "locate_executable",
    "PackageContext",
    "discover_packages",
]
