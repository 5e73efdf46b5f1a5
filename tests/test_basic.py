import json


def test_health_check(client):
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.json == {"ok": True}

def test_extensions_filter(client):
    response = client.get("/api/attachments/extensions")
    assert response.status_code == 200
    names = [f["name"] for f in response.json["filters"]]
    assert names == ["Supported", "All Files"]
    assert "pdf" in response.json["filters"][0]["extensions"]

def test_attachments_in_selection_order(client, tmp_path):
    a = tmp_path / "a.md"
    a.write_text("# hello\n", encoding="utf-8")
    b = tmp_path / "b.json"
    b.write_text('{"x":1}', encoding="utf-8")
    missing = tmp_path / "gone.txt"

    response = client.post("/api/attachments", json={"paths": [str(a), str(b), str(missing)]})
    assert response.status_code == 200
    files = response.json["files"]
    assert [f["name"] for f in files] == ["a.md", "b.json", "gone.txt"]
    assert files[0]["content"] == "# hello\n"
    assert json.loads(files[1]["content"]) == {"x": 1}
    assert files[2]["content"] == "[Could not read file]"

def test_attachments_rejects_bad_payload(client):
    assert client.post("/api/attachments", json={"paths": "nope"}).status_code == 400
    assert client.post("/api/attachments", json={"paths": ["relative.txt"]}).status_code == 400

def test_remote_clients_are_refused(client):
    response = client.get("/healthz", environ_base={"REMOTE_ADDR": "10.0.0.7"})
    assert response.status_code == 403
