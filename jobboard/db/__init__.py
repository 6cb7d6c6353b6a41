"""
Database module - relational store and MongoDB cache connections.
"""
from jobboard.db.database import Base, get_db_session, init_db, check_db_connection
from jobboard.db.mongodb import get_mongo_db, check_mongo_connection

__all__ = [
    "Base",
    "get_db_session",
    "init_db",
    "check_db_connection",
    "get_mongo_db",
    "check_mongo_connection",
]
