"""Shared utility helpers."""

from pwcheck.utils.paths import atomic_temp_path, write_json_atomically
from pwcheck.utils.time_utils import now_utc

__all__ = [
    "atomic_temp_path",
    "write_json_atomically",
    "now_utc",
]
