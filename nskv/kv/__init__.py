"""Flat KV store backends."""

from .base import KVStore
from .counting import Counting
from .disk import Disk
from .memory import Memory

__all__ = ["Counting", "Disk", "KVStore", "Memory"]
