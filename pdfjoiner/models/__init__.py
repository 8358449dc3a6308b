from .merge import MergeDocument, MergeRequest

__all__ = [
    "MergeDocument",
    "MergeRequest",
]
