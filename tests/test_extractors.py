import json

from core.extractors import extract_attachment, extract_file
from core.plugin_base import Failure
from core.quota import Quota

KB = 1024
MB = 1024 * 1024


def test_plain_text_returned_unchanged(tmp_path, quota):
    p = tmp_path / "main.py"
    src = "def f():\n    return 1\n"
    p.write_text(src, encoding="utf-8")
    assert extract_attachment(str(p), quota=quota) == src

def test_file_over_cap_reports_size(tmp_path):
    p = tmp_path / "big.txt"
    p.write_bytes(b"a" * (3 * MB))
    out = extract_attachment(str(p), quota=Quota(file_limit=2 * MB, entry_limit=512 * KB))
    assert out == "[File too large: 3.0 MB — limit is 2 MB]"

def test_binary_file_reports_byte_count(tmp_path, quota):
    p = tmp_path / "blob.dat"
    p.write_bytes(b"\x7fELF\x00\x01" + b"x" * 100)
    res = extract_file(str(p), quota=quota)
    assert res.text == "[Binary file — 106 bytes]"
    assert res.failure is Failure.BINARY_CONTENT

def test_binary_wins_over_size_check(tmp_path):
    p = tmp_path / "disk.img"
    p.write_bytes(b"\x00" * 4096)
    out = extract_attachment(str(p), quota=Quota(file_limit=1024, entry_limit=1024))
    assert out == "[Binary file — 4096 bytes]"

def test_json_is_pretty_printed(tmp_path, quota):
    p = tmp_path / "data.json"
    p.write_text('{"a":[1,2]}', encoding="utf-8")
    out = extract_attachment(str(p), quota=quota)
    assert out == json.dumps({"a": [1, 2]}, indent=2)

def test_invalid_json_passes_through(tmp_path, quota):
    p = tmp_path / "broken.json"
    p.write_text('{"a":', encoding="utf-8")
    res = extract_file(str(p), quota=quota)
    assert res.text == '{"a":'
    assert res.meta["failure"] == Failure.MALFORMED_DATA.value

def test_ndjson_untouched(tmp_path, quota):
    p = tmp_path / "events.ndjson"
    raw = '{"e":1}\n{"e":2}\n'
    p.write_text(raw, encoding="utf-8")
    assert extract_attachment(str(p), quota=quota) == raw

def test_display_name_drives_classification(tmp_path, quota):
    p = tmp_path / "upload-1234"
    p.write_text('{"k":true}', encoding="utf-8")
    assert extract_attachment(str(p), name="settings.json", quota=quota) == '{\n  "k": true\n}'

def test_latin1_file_is_decoded(tmp_path, quota):
    p = tmp_path / "legacy.txt"
    p.write_bytes("Grüße".encode("latin-1"))
    assert extract_attachment(str(p), quota=quota) == "Grüße"

def test_missing_file_never_raises(tmp_path):
    assert extract_attachment(str(tmp_path / "nope.txt")) == "[Could not read file]"

def test_directory_never_raises(tmp_path):
    assert extract_attachment(str(tmp_path)) == "[Could not read file]"

def test_plugin_crash_degrades_to_placeholder(tmp_path, monkeypatch, quota):
    from plugins.text_basic import TextBasic

    def boom(self, handle, quota):
        raise RuntimeError("unexpected")

    monkeypatch.setattr(TextBasic, "extract", boom)
    p = tmp_path / "a.txt"
    p.write_text("hi", encoding="utf-8")
    assert extract_attachment(str(p), quota=quota) == "[Could not read file]"

def test_one_bad_file_does_not_affect_the_next(tmp_path, quota):
    bad = tmp_path / "bad.gz"
    bad.write_bytes(b"not gzip at all")
    good = tmp_path / "good.txt"
    good.write_text("fine", encoding="utf-8")
    assert extract_attachment(str(bad)) == "[Could not decompress bad.gz]"
    assert extract_attachment(str(good)) == "fine"
