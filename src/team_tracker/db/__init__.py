"""Database engine, tables and transaction helpers."""

from .session import (
    configure_database,
    dispose_database,
    get_engine,
    init_database,
    unit_of_work,
)

__all__ = [
    "configure_database",
    "dispose_database",
    "get_engine",
    "init_database",
    "unit_of_work",
]
