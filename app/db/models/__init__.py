# Models package (re-export feature modules for stable imports)
from .storage.record import StoredRecord

__all__ = [
    "StoredRecord",
]
