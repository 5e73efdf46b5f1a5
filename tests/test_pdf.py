import json
import sys

from core.extractors import extract_attachment, extract_file
from core.plugin_base import Failure
from core.quota import Quota
from core.tools import ToolResult
from plugins import pdf_basic
from plugins.pdf_basic import PdfBasic, scrape_ascii

KB = 1024
MB = 1024 * 1024


def fake_pdf(tmp_path, name="paper.pdf", size=20 * KB, body=b""):
    p = tmp_path / name
    data = b"%PDF-1.4\n" + body
    p.write_bytes(data + b"\x00" * max(0, size - len(data)))
    return p


def test_parser_tier_used_when_pdftotext_missing(tmp_path, monkeypatch):
    monkeypatch.setattr(pdf_basic.PDFTOTEXT, "available", lambda: False)
    payload = json.dumps({"pages": 3, "text": "Page one.\n\nPage two.\n\nPage three."}).encode()
    monkeypatch.setattr(pdf_basic, "run_bounded", lambda cmd, **kw: ToolResult(0, payload))
    p = fake_pdf(tmp_path, size=20 * KB)

    res = extract_file(str(p))
    assert res.text.startswith("[PDF: paper.pdf, 20 KB, 3 pages]\n\nPage one.")
    assert res.meta["tier"] == "parsed_text"

def test_parser_child_command(tmp_path, monkeypatch):
    monkeypatch.setattr(pdf_basic.PDFTOTEXT, "available", lambda: False)
    seen = {}

    def fake_run(cmd, timeout, max_output, env=None):
        seen.update(cmd=cmd, timeout=timeout, env=env)
        return ToolResult(1)

    monkeypatch.setattr(pdf_basic, "run_bounded", fake_run)
    PdfBasic()._parsed_text(pdf_basic.FileHandle(str(tmp_path / "a.pdf"), "a.pdf", 10), Quota())
    assert seen["cmd"][0] == sys.executable
    assert seen["cmd"][1].endswith("pdf_basic.py")
    assert seen["cmd"][2:4] == ["--input", str(tmp_path / "a.pdf")]
    assert seen["timeout"] > 0

def test_layout_tier_wins_and_counts_pages(tmp_path, monkeypatch):
    monkeypatch.setattr(pdf_basic.PDFTOTEXT, "available", lambda: True)
    monkeypatch.setattr(
        pdf_basic.PDFTOTEXT, "run",
        lambda args, timeout, max_output: ToolResult(0, b"first\fsecond\f"),
    )
    monkeypatch.setattr(pdf_basic, "run_bounded", lambda *a, **kw: (_ for _ in ()).throw(AssertionError))
    p = fake_pdf(tmp_path, size=2 * KB)
    out = extract_attachment(str(p))
    assert out.startswith("[PDF: paper.pdf, 2 KB, 2 pages]\n\nfirst\nsecond")

def test_raw_tier_scrapes_ascii_runs(tmp_path, monkeypatch):
    monkeypatch.setattr(pdf_basic.PDFTOTEXT, "available", lambda: False)
    monkeypatch.setattr(pdf_basic, "run_bounded", lambda cmd, **kw: ToolResult(1))
    words = b"\x00".join([b"Quarterly revenue grew strongly"] * 6)
    p = fake_pdf(tmp_path, body=words)
    res = extract_file(str(p))
    assert res.ok
    assert res.meta["tier"] == "raw_text"
    assert "Quarterly revenue grew strongly Quarterly" in res.text
    assert res.text.startswith("[PDF: paper.pdf, 20 KB]\n\n")

def test_all_tiers_fail(tmp_path, monkeypatch):
    monkeypatch.setattr(pdf_basic.PDFTOTEXT, "available", lambda: False)
    monkeypatch.setattr(pdf_basic, "run_bounded", lambda cmd, **kw: ToolResult(None, timed_out=True))
    p = fake_pdf(tmp_path, name="scan.pdf", body=b"short")
    res = extract_file(str(p))
    assert res.failure is Failure.UNPARSEABLE_DOCUMENT
    assert res.text == (
        "[Could not extract text from PDF: scan.pdf — "
        "install poppler-utils (pdftotext) for better PDF support]"
    )

def test_oversized_pdf_rejected_before_any_tier(tmp_path, monkeypatch):
    def forbidden(*a, **kw):
        raise AssertionError("no tier may run")

    monkeypatch.setattr(PdfBasic, "_layout_text", forbidden)
    monkeypatch.setattr(PdfBasic, "_parsed_text", forbidden)
    monkeypatch.setattr(PdfBasic, "_raw_text", forbidden)
    p = fake_pdf(tmp_path, size=5 * MB)
    out = extract_attachment(str(p), quota=Quota(file_limit=2 * MB, entry_limit=512 * KB))
    assert out == "[PDF too large: 5.0 MB — limit is 4 MB]"

def test_tier_output_truncated_to_budget(tmp_path, monkeypatch):
    monkeypatch.setattr(pdf_basic.PDFTOTEXT, "available", lambda: False)
    payload = json.dumps({"pages": 1, "text": "w" * 5000}).encode()
    monkeypatch.setattr(pdf_basic, "run_bounded", lambda cmd, **kw: ToolResult(0, payload))
    p = fake_pdf(tmp_path, size=1000)
    res = extract_file(str(p), quota=Quota(file_limit=1000, entry_limit=1000))
    assert res.text.split("\n\n", 1)[1] == "w" * 1000

def test_scrape_ascii_ignores_short_runs():
    assert scrape_ascii(b"abc\x00defghijkl\x01mn\x02opqrstuvwx") == "defghijkl opqrstuvwx"

def test_parse_pdf_reads_every_page(monkeypatch):
    class Page:
        def __init__(self, text):
            self.text = text

        def extract_text(self):
            return self.text

    class Reader:
        def __init__(self, path):
            self.pages = [Page("one"), Page(""), Page("three")]

    import PyPDF2
    monkeypatch.setattr(PyPDF2, "PdfReader", Reader)
    assert pdf_basic.parse_pdf("x.pdf") == {"pages": 3, "text": "one\n\nthree"}
