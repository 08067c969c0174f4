"""
Bounded log retrieval.
"""

from honeylog.retrieval.observer import LoggingObserver, RetrievalObserver
from honeylog.retrieval.retriever import BoundedRetriever
from honeylog.retrieval.segments import SegmentLayout

__all__ = [
    "BoundedRetriever",
    "LoggingObserver",
    "RetrievalObserver",
    "SegmentLayout",
]
