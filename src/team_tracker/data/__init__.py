"""Catalog loading."""

from .catalog_repository import load_catalog, seed_catalog, seed_catalog_if_present

__all__ = ["load_catalog", "seed_catalog", "seed_catalog_if_present"]
