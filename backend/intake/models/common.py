"""Shared helpers for in-memory records."""
import secrets
from datetime import datetime, timezone


def new_id(prefix: str) -> str:
    """Short opaque id such as ``prop_3f9a1c0b2d4e``."""
    return f"{prefix}_{secrets.token_hex(6)}"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
