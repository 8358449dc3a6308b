from __future__ import annotations

import mimetypes
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple
from uuid import uuid4

from pdfjoiner.core.logging import configure_logging

logger = configure_logging()

PDF_MIME_TYPE = "application/pdf"


class SelectionState(str, Enum):
    idle = "idle"
    has_files = "has_files"
    ready = "ready"
    merging = "merging"


@dataclass
class CandidateFile:
    """ملف مرشح للاختيار: الاسم ونوع المحتوى المعلن ومصدر البايتات."""

    name: str
    content_type: str
    path: Optional[Path] = None
    data: Optional[bytes] = field(default=None, repr=False)

    @classmethod
    def from_path(cls, path: Path | str) -> "CandidateFile":
        path = Path(path)
        content_type, _ = mimetypes.guess_type(path.name)
        return cls(name=path.name, content_type=content_type or "application/octet-stream", path=path)

    def read(self) -> bytes:
        if self.data is not None:
            return self.data
        if self.path is None:
            raise ValueError(f"الملف {self.name} بلا مصدر للبيانات.")
        return self.path.read_bytes()


@dataclass
class SelectedFile:
    id: str
    display_name: str
    source: CandidateFile = field(repr=False)

    def read_bytes(self) -> bytes:
        # القراءة مؤجلة حتى لحظة بناء طلب الدمج
        return self.source.read()


def _new_id(name: str) -> str:
    return f"{name}-{int(time.time() * 1000)}-{uuid4().hex[:6]}"


class SelectionStore:
    """قائمة الملفات المختارة بترتيب المستخدم؛ الترتيب هنا هو ترتيب الدمج."""

    def __init__(self) -> None:
        self._files: List[SelectedFile] = []
        self.merging = False

    def __len__(self) -> int:
        return len(self._files)

    def __iter__(self):
        return iter(list(self._files))

    @property
    def files(self) -> List[SelectedFile]:
        return list(self._files)

    @property
    def ids(self) -> List[str]:
        return [entry.id for entry in self._files]

    @property
    def state(self) -> SelectionState:
        if self.merging:
            return SelectionState.merging
        if len(self._files) >= 2:
            return SelectionState.ready
        if self._files:
            return SelectionState.has_files
        return SelectionState.idle

    @property
    def can_merge(self) -> bool:
        return self.state is SelectionState.ready

    def add(self, candidates: Iterable[CandidateFile]) -> List[SelectedFile]:
        """إضافة ملفات PDF فقط إلى نهاية القائمة؛ غيرها يُتجاهل بصمت."""
        added: List[SelectedFile] = []
        for candidate in candidates:
            if candidate.content_type != PDF_MIME_TYPE:
                logger.debug("تم تجاهل ملف ليس من نوع PDF: %s (%s)", candidate.name, candidate.content_type)
                continue
            added.append(SelectedFile(id=_new_id(candidate.name), display_name=candidate.name, source=candidate))
        self._files.extend(added)
        return added

    def remove(self, file_id: str) -> None:
        self._files = [entry for entry in self._files if entry.id != file_id]

    def reorder(self, new_order: Sequence[str]) -> None:
        """استبدال القائمة بالترتيب المرسل من الواجهة دون التحقق من كونه تبديلًا كاملًا."""
        by_id = {entry.id: entry for entry in self._files}
        self._files = [by_id[file_id] for file_id in new_order if file_id in by_id]

    def move(self, file_id: str, index: int) -> None:
        order = self.ids
        if file_id not in order:
            return
        order.remove(file_id)
        index = max(0, min(index, len(order)))
        order.insert(index, file_id)
        self.reorder(order)

    def payload(self) -> List[Tuple[str, bytes]]:
        """لقطة من الملفات بترتيبها الحالي كما ستُرسل في طلب الدمج."""
        return [(entry.display_name, entry.read_bytes()) for entry in self._files]
