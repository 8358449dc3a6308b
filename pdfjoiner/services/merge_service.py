from __future__ import annotations

from typing import Any, List, Sequence

from pdfjoiner.core.config import get_settings
from pdfjoiner.core.logging import configure_logging
from pdfjoiner.services.pdf_backends import PDFBackend, get_backend

logger = configure_logging()

MERGE_FAILED_MESSAGE = "Failed to merge PDFs"


class MergeFailedError(RuntimeError):
    """خطأ عام يغطي أي فشل أثناء فك الترميز أو النسخ أو التسلسل."""

    def __init__(self, message: str = MERGE_FAILED_MESSAGE) -> None:
        super().__init__(message)


class MergeService:
    """دمج عدة ملفات PDF بالترتيب المحدد في ملف واحد داخل الذاكرة."""

    def __init__(self, backend: PDFBackend | None = None) -> None:
        self.backend = backend or get_backend(get_settings().pdf_backend)

    def merge(self, documents: Sequence[bytes]) -> bytes:
        if not documents:
            logger.error("طلب دمج بدون أي ملفات.")
            raise MergeFailedError()

        logger.info("بدء دمج %s ملفات باستخدام %s", len(documents), self.backend.name)

        output = self.backend.create()
        opened: List[Any] = [output]
        page_total = 0
        try:
            for data in documents:
                source = self.backend.decode(data)
                opened.append(source)
                indices = self.backend.page_indices(source)
                for page in self.backend.copy_pages(output, source, indices):
                    self.backend.append_page(output, page)
                    page_total += 1
            merged = self.backend.serialize(output)
        except Exception as exc:
            logger.exception("فشل دمج الملفات: %s", exc)
            raise MergeFailedError() from exc
        finally:
            for document in opened:
                self.backend.close(document)

        logger.info("اكتمل الدمج: %s صفحة (%s بايت)", page_total, len(merged))
        return merged
