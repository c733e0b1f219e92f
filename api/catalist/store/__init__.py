from catalist.store.base import InMemoryRowStore, Row, RowStore, StoreError
from catalist.store.sql import SQLAlchemyRowStore

__all__ = ["InMemoryRowStore", "Row", "RowStore", "SQLAlchemyRowStore", "StoreError"]
