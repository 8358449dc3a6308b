import httpx
import pytest

from pdfjoiner.client import MergeClient
from pdfjoiner.selection import CandidateFile, SelectionState


def _pdf(name, data):
    return CandidateFile(name=name, content_type="application/pdf", data=data)


@pytest.fixture
def merge_client(client, tmp_path) -> MergeClient:
    return MergeClient(client, download_dir=tmp_path)


def test_merge_saves_merged_pdf(merge_client, pdf_a, pdf_b, page_labels, tmp_path):
    merge_client.store.add([_pdf("a.pdf", pdf_a), _pdf("b.pdf", pdf_b)])

    target = merge_client.merge()

    assert target == tmp_path / "merged.pdf"
    assert page_labels(target.read_bytes()) == ["A-1", "A-2", "B-1", "B-2", "B-3"]


def test_merge_uses_current_order_after_reorder(merge_client, pdf_a, pdf_b, page_labels):
    a, b = merge_client.store.add([_pdf("a.pdf", pdf_a), _pdf("b.pdf", pdf_b)])
    merge_client.store.reorder([b.id, a.id])

    target = merge_client.merge()

    assert page_labels(target.read_bytes()) == ["B-1", "B-2", "B-3", "A-1", "A-2"]


def test_removed_file_is_excluded(merge_client, make_pdf, pdf_a, pdf_b, page_labels):
    c_pdf = make_pdf("C", 1)
    a, b, c = merge_client.store.add([_pdf("a.pdf", pdf_a), _pdf("b.pdf", pdf_b), _pdf("c.pdf", c_pdf)])
    merge_client.store.remove(b.id)

    target = merge_client.merge()

    assert page_labels(target.read_bytes()) == ["A-1", "A-2", "C-1"]


def test_merge_requires_two_files(merge_client, pdf_a, tmp_path):
    merge_client.store.add([_pdf("a.pdf", pdf_a)])

    assert merge_client.merge() is None
    assert not (tmp_path / "merged.pdf").exists()


def test_selection_is_kept_after_merge(merge_client, pdf_a, pdf_b):
    added = merge_client.store.add([_pdf("a.pdf", pdf_a), _pdf("b.pdf", pdf_b)])

    merge_client.merge()

    assert merge_client.store.ids == [entry.id for entry in added]
    assert merge_client.store.state is SelectionState.ready


def test_failed_merge_is_silent(merge_client, pdf_a, corrupt_pdf, tmp_path):
    merge_client.store.add([_pdf("a.pdf", pdf_a), _pdf("broken.pdf", corrupt_pdf)])

    assert merge_client.merge() is None
    assert not (tmp_path / "merged.pdf").exists()
    assert merge_client.store.state is SelectionState.ready


def test_transport_error_resets_merging_flag(pdf_a, pdf_b, tmp_path):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    http = httpx.Client(base_url="http://merge.invalid", transport=httpx.MockTransport(handler))
    merge_client = MergeClient(http, download_dir=tmp_path)
    merge_client.store.add([_pdf("a.pdf", pdf_a), _pdf("b.pdf", pdf_b)])

    assert merge_client.merge() is None
    assert merge_client.store.merging is False


def test_file_without_source_is_silent_failure(merge_client, pdf_a, tmp_path):
    merge_client.store.add([_pdf("a.pdf", pdf_a), CandidateFile("b.pdf", "application/pdf")])

    assert merge_client.merge() is None
    assert not (tmp_path / "merged.pdf").exists()
    assert merge_client.store.merging is False
