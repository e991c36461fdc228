from .journal_batches import JournalBatchViewSet

__all__ = ["JournalBatchViewSet"]
