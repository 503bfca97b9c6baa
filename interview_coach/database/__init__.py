"""
Database module - MongoDB document store access layer.

This module handles:
- Client construction and readiness checks
- Collection names
- Document <-> payload helpers
"""
from interview_coach.database import collections
from interview_coach.database.connection import DocumentStore, build_store
from interview_coach.database.documents import new_id, to_public, to_public_list, utcnow

__all__ = [
    "collections",
    "DocumentStore",
    "build_store",
    "new_id",
    "to_public",
    "to_public_list",
    "utcnow",
]
