"""Model exports."""

from .kv import KVRecord
from .score import ANONYMOUS, NAME_MAX_LENGTH, ScoreEntry

__all__ = [
    "ANONYMOUS",
    "KVRecord",
    "NAME_MAX_LENGTH",
    "ScoreEntry",
]
