from io import BytesIO
from typing import Callable, List

import pytest
from fastapi.testclient import TestClient
from pypdf import PdfReader
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from pdfjoiner.main import app


def _make_pdf(label: str, pages: int) -> bytes:
    packet = BytesIO()
    c = canvas.Canvas(packet, pagesize=letter)
    for number in range(1, pages + 1):
        c.setFont("Helvetica", 24)
        c.drawString(72, 700, f"{label}-{number}")
        c.showPage()
    c.save()
    return packet.getvalue()


def _page_labels(data: bytes) -> List[str]:
    reader = PdfReader(BytesIO(data))
    return [page.extract_text().strip() for page in reader.pages]


@pytest.fixture
def make_pdf() -> Callable[[str, int], bytes]:
    return _make_pdf


@pytest.fixture
def page_labels() -> Callable[[bytes], List[str]]:
    return _page_labels


@pytest.fixture
def pdf_a() -> bytes:
    return _make_pdf("A", 2)


@pytest.fixture
def pdf_b() -> bytes:
    return _make_pdf("B", 3)


@pytest.fixture
def corrupt_pdf() -> bytes:
    return b"this is not a pdf document"


@pytest.fixture
def client() -> TestClient:
    with TestClient(app) as test_client:
        yield test_client
