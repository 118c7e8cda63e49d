from storefront.db.session import Base, Database, get_db, transaction

__all__ = ["Base", "Database", "get_db", "transaction"]
