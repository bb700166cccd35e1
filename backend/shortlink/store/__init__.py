from .base import MappingStore
from .memory import InMemoryMappingStore
from .sql import SQLAlchemyMappingStore

__all__ = ["MappingStore", "InMemoryMappingStore", "SQLAlchemyMappingStore"]
