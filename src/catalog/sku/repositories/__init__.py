"""Catalog repositories package."""

from catalog.sku.repositories.interfaces import ICatalogRepository
from catalog.sku.repositories.memory_repository import InMemoryCatalogRepository

__all__ = ["ICatalogRepository", "InMemoryCatalogRepository"]
