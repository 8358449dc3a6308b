from .store import CandidateFile, PDF_MIME_TYPE, SelectedFile, SelectionState, SelectionStore

__all__ = [
    "CandidateFile",
    "PDF_MIME_TYPE",
    "SelectedFile",
    "SelectionState",
    "SelectionStore",
]
