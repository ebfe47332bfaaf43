"""
sqlsamples - Runnable SQL sample collection.

Schema, seed data, topic-grouped query examples and cleanup for SQLite,
PostgreSQL and DB2, shipped as Python so they can be executed, checked
and exported as plain ``.sql`` scripts.
"""

__version__ = "0.1.0"
