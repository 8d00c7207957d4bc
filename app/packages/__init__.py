"""Package registry: the business packages this service can run."""

from __future__ import annotations

import os
from typing import Dict

from . import catalog
from .types import AppPackage

PACKAGE_REGISTRY: Dict[str, AppPackage] = {
    catalog.package.name: catalog.package,
}


def get_active_package() -> AppPackage:
    """Pick the package named by ``APP_ACTIVE_PACKAGE``, defaulting to the catalog."""
    package_name = os.getenv("APP_ACTIVE_PACKAGE", catalog.package.name)
    try:
        return PACKAGE_REGISTRY[package_name]
    except KeyError as exc:
        available = ", ".join(PACKAGE_REGISTRY)
        raise RuntimeError(f"Unknown package '{package_name}', available: {available}") from exc


__all__ = ["catalog", "PACKAGE_REGISTRY", "get_active_package"]
