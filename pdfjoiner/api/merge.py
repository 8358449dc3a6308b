from typing import List

from fastapi import APIRouter, File, Form, HTTPException, Response, UploadFile, status
from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError

from pdfjoiner.core.config import get_settings
from pdfjoiner.core.logging import configure_logging
from pdfjoiner.models import MergeDocument, MergeRequest
from pdfjoiner.services.merge_service import MERGE_FAILED_MESSAGE, MergeFailedError, MergeService

router = APIRouter(prefix="/pdf", tags=["PDF Merge"])

settings = get_settings()
logger = configure_logging()
merge_service = MergeService()


async def _build_request(uploads: List[UploadFile], count: int) -> MergeRequest:
    if not uploads:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="يجب اختيار ملف PDF واحد على الأقل.",
        )

    if len(uploads) > settings.max_files:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"الحد الأقصى لعدد الملفات هو {settings.max_files}.",
        )

    documents = [
        MergeDocument(filename=upload.filename or "document.pdf", data=await upload.read())
        for upload in uploads
    ]
    try:
        return MergeRequest(count=count, documents=documents)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=[error["msg"] for error in exc.errors()],
        ) from exc


@router.post("/merge", summary="دمج ملفات PDF بالترتيب المرسل وإرجاع الملف الناتج")
async def merge_pdfs(
    uploads: List[UploadFile] = File(default=[], alias=settings.upload_field),
    count: int = Form(..., description="عدد الملفات المرسلة."),
) -> Response:
    payload = await _build_request(uploads, count)
    logger.info(
        "طلب دمج لـ %s ملفات: %s",
        payload.count,
        ", ".join(document.filename for document in payload.documents),
    )

    try:
        merged = await run_in_threadpool(merge_service.merge, payload.payload())
    except MergeFailedError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=MERGE_FAILED_MESSAGE,
        ) from None

    return Response(
        content=merged,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{settings.output_filename}"'},
    )
