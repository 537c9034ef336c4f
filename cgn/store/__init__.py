"""Record caches for Campus Gaming Network."""

from cgn.store.record_cache import RecordCache

__all__ = ["RecordCache"]
