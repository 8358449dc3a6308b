from typing import List

from pydantic import BaseModel, Field, model_validator


class MergeDocument(BaseModel):
    filename: str = Field(..., description="اسم الملف كما أرسله العميل.")
    data: bytes = Field(..., repr=False, description="محتوى الملف الخام.")


class MergeRequest(BaseModel):
    """طلب دمج صريح: عدد الملفات مع قائمتها بالترتيب المطلوب."""

    count: int = Field(..., ge=1, description="عدد الملفات المرسلة.")
    documents: List[MergeDocument] = Field(..., description="الملفات بترتيب الدمج.")

    @model_validator(mode="after")
    def validate_count(self) -> "MergeRequest":
        if self.count != len(self.documents):
            raise ValueError(
                f"عدد الملفات المعلن ({self.count}) لا يطابق عدد الملفات المرسلة ({len(self.documents)})."
            )
        return self

    def payload(self) -> List[bytes]:
        return [document.data for document in self.documents]
