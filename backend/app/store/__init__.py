from app.store.interface import AccountProvider, DocumentStore, OccupancyPredicate
from app.store.sqlalchemy_store import SqlAlchemyDocumentStore

__all__ = [
    "AccountProvider",
    "DocumentStore",
    "OccupancyPredicate",
    "SqlAlchemyDocumentStore",
]
