from __future__ import annotations

from pathlib import Path
from typing import Optional

import httpx

from pdfjoiner.core.config import get_settings
from pdfjoiner.core.logging import configure_logging
from pdfjoiner.selection.store import PDF_MIME_TYPE, SelectionStore

logger = configure_logging()


class MergeClient:
    """يرسل الملفات المختارة بترتيبها الحالي إلى خادم الدمج ويحفظ الملف الناتج.

    الفشل لا يُرفع إلى المستخدم: يُسجل فقط ثم يعود العميل إلى حالته السابقة،
    وتبقى قائمة الملفات كما هي بعد الدمج سواء نجح أم فشل.
    """

    def __init__(
        self,
        http: httpx.Client,
        store: SelectionStore | None = None,
        download_dir: Path | str = ".",
        endpoint: str = "/pdf/merge",
    ) -> None:
        settings = get_settings()
        self.http = http
        self.store = store if store is not None else SelectionStore()
        self.download_dir = Path(download_dir)
        self.endpoint = endpoint
        self.upload_field = settings.upload_field
        self.output_filename = settings.output_filename

    @classmethod
    def connect(cls, base_url: str, **kwargs) -> "MergeClient":
        return cls(httpx.Client(base_url=base_url, timeout=60), **kwargs)

    def merge(self) -> Optional[Path]:
        if not self.store.can_merge:
            logger.debug("تم تجاهل طلب الدمج في الحالة %s", self.store.state.value)
            return None

        self.store.merging = True
        try:
            payload = self.store.payload()
            files = [(self.upload_field, (name, data, PDF_MIME_TYPE)) for name, data in payload]
            response = self.http.post(self.endpoint, files=files, data={"count": str(len(payload))})
            response.raise_for_status()

            self.download_dir.mkdir(parents=True, exist_ok=True)
            target = self.download_dir / self.output_filename
            target.write_bytes(response.content)
            logger.info("تم حفظ الملف المدمج: %s", target)
            return target
        except (httpx.HTTPError, OSError, ValueError) as exc:
            logger.error("Error merging PDFs: %s", exc)
            return None
        finally:
            self.store.merging = False
