from .journal_batches import (
    JournalBatchDetailSerializer,
    JournalBatchSerializer,
    JournalLineSerializer,
)

__all__ = [
    "JournalBatchSerializer",
    "JournalBatchDetailSerializer",
    "JournalLineSerializer",
]
