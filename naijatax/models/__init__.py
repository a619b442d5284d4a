"""
ORM models package.

Importing this package registers every table on Base.metadata, which
alembic/env.py relies on for autogenerate.
"""
from naijatax.models.chat_history import ChatHistoryORM
from naijatax.models.history_record import HistoryRecordORM

__all__ = ["ChatHistoryORM", "HistoryRecordORM"]
