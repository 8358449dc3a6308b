from __future__ import annotations

from io import BytesIO
from typing import Any, Dict, List, Protocol, Sequence, Tuple, Type

import fitz  # PyMuPDF
from pypdf import PageObject, PdfReader, PdfWriter


class PDFBackend(Protocol):
    """الواجهة التي يعتمد عليها منسق الدمج للتعامل مع مكتبة PDF خارجية.

    المنسق لا يعرف شيئًا عن بنية الملف الداخلية؛ كل ما يحتاجه هو فك الترميز،
    معرفة فهارس الصفحات، نسخ الصفحات وإلحاقها، ثم التسلسل إلى بايتات.
    """

    name: str

    def create(self) -> Any: ...

    def decode(self, data: bytes) -> Any: ...

    def page_indices(self, document: Any) -> Sequence[int]: ...

    def copy_pages(self, target: Any, source: Any, indices: Sequence[int]) -> List[Any]: ...

    def append_page(self, target: Any, page: Any) -> None: ...

    def serialize(self, document: Any) -> bytes: ...

    def close(self, document: Any) -> None: ...


class PypdfBackend:
    """تنفيذ الواجهة باستخدام pypdf (الخيار الافتراضي)."""

    name = "pypdf"

    def create(self) -> PdfWriter:
        return PdfWriter()

    def decode(self, data: bytes) -> PdfReader:
        return PdfReader(BytesIO(data))

    def page_indices(self, document: PdfReader) -> List[int]:
        return list(range(len(document.pages)))

    def copy_pages(self, target: PdfWriter, source: PdfReader, indices: Sequence[int]) -> List[PageObject]:
        # PdfWriter.add_page ينسخ الصفحة وكائناتها عند الإلحاق
        return [source.pages[index] for index in indices]

    def append_page(self, target: PdfWriter, page: PageObject) -> None:
        target.add_page(page)

    def serialize(self, document: PdfWriter) -> bytes:
        buffer = BytesIO()
        document.write(buffer)
        buffer.seek(0)
        return buffer.getvalue()

    def close(self, document: Any) -> None:
        # المستندات هنا في الذاكرة بالكامل ولا تحتاج إلى تحرير صريح
        return None


class PyMuPDFBackend:
    """تنفيذ الواجهة باستخدام PyMuPDF عبر insert_pdf."""

    name = "pymupdf"

    def create(self) -> fitz.Document:
        return fitz.open()

    def decode(self, data: bytes) -> fitz.Document:
        return fitz.open(stream=data, filetype="pdf")

    def page_indices(self, document: fitz.Document) -> List[int]:
        return list(range(document.page_count))

    def copy_pages(
        self,
        target: fitz.Document,
        source: fitz.Document,
        indices: Sequence[int],
    ) -> List[Tuple[fitz.Document, int]]:
        # لا توجد صفحة مستقلة في PyMuPDF؛ النسخ الفعلي يتم عند الإلحاق
        return [(source, index) for index in indices]

    def append_page(self, target: fitz.Document, page: Tuple[fitz.Document, int]) -> None:
        source, index = page
        target.insert_pdf(source, from_page=index, to_page=index)

    def serialize(self, document: fitz.Document) -> bytes:
        return document.tobytes(garbage=1, deflate=True)

    def close(self, document: fitz.Document) -> None:
        document.close()


BACKENDS: Dict[str, Type] = {
    PypdfBackend.name: PypdfBackend,
    PyMuPDFBackend.name: PyMuPDFBackend,
}


def get_backend(name: str) -> PDFBackend:
    """إرجاع تنفيذ الواجهة المطابق للاسم المحدد في الإعدادات."""
    try:
        backend_cls = BACKENDS[name.lower()]
    except KeyError:
        raise ValueError(
            f"مكتبة PDF غير مدعومة: {name}. الخيارات المتاحة: {', '.join(BACKENDS)}."
        ) from None
    return backend_cls()
