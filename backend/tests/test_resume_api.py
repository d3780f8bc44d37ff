"""Tests for /api/resumes: upload, search, filters, detail, update, soft delete"""
import pytest

PDF_BYTES = b"%PDF-1.4\n% test resume\n"


def _upload(client, headers, filename="jane.pdf", content=PDF_BYTES, **form):
    files = {"file": (filename, content, "application/pdf")} if content is not None else None
    return client.post("/api/resumes", headers=headers, files=files, data=form)


@pytest.fixture
def seeded(client, admin_headers):
    """Two resumes: Jane Doe (extracted) and John Roe (form overrides)."""
    jane = _upload(client, admin_headers).json()
    john = _upload(
        client,
        admin_headers,
        filename="john.pdf",
        name="John Roe",
        major="Mathematics",
        graduationYear="2023",
        companies="initech, Bank of America",
        keywords="R, Statistics",
    ).json()
    return jane, john


def test_upload_requires_admin(client, member_headers):
    assert _upload(client, {}).status_code == 401
    assert _upload(client, member_headers).status_code == 401


def test_upload_returns_created_resume(client, admin_headers, fake_store):
    r = _upload(client, admin_headers)
    assert r.status_code == 201
    data = r.json()
    assert data["name"] == "Jane Doe"
    assert data["companies"] == ["Acme Corp", "Globex"]
    assert data["artifactUrl"].startswith("https://files.test/resumes/jane_doe_")
    assert "parsingWarning" not in data
    fake_store.put.assert_called_once()


def test_upload_without_file_is_400(client, admin_headers):
    r = client.post("/api/resumes", headers=admin_headers, data={"name": "Jane"})
    assert r.status_code == 400
    assert r.json() == {"error": True, "message": "No PDF file uploaded.", "details": {"step": "validation"}}


def test_upload_non_pdf_is_400(client, admin_headers, fake_store):
    r = _upload(client, admin_headers, filename="notes.txt", content=b"just text")
    assert r.status_code == 400
    assert r.json()["message"] == "Only PDF files are allowed."
    fake_store.put.assert_not_called()


def test_upload_storage_failure_is_502(client, admin_headers, fake_store):
    fake_store.put.side_effect = RuntimeError("bucket unavailable")
    r = _upload(client, admin_headers)
    assert r.status_code == 502
    assert r.json()["details"]["step"] == "storage_put"
    r = client.get("/api/resumes/search", headers=admin_headers)
    assert r.json()["count"] == 0


def test_upload_parser_failure_reports_warning(client, admin_headers, fake_extractor):
    fake_extractor.side_effect = ValueError("no text layer")
    r = _upload(client, admin_headers, filename="scanned.pdf", major="Physics")
    assert r.status_code == 201
    data = r.json()
    assert data["name"] == "scanned"
    assert data["major"] == "Physics"
    assert data["graduationYear"] == "Unspecified"
    assert data["parsingWarning"]


def test_search_requires_auth(client):
    assert client.get("/api/resumes/search").status_code == 401


def test_search_all_newest_first(client, member_headers, seeded):
    jane, john = seeded
    r = client.get("/api/resumes/search", headers=member_headers)
    assert r.status_code == 200
    data = r.json()
    assert data["count"] == 2
    assert [x["id"] for x in data["resumes"]] == [john["id"], jane["id"]]


@pytest.mark.parametrize(
    "params,expected",
    [
        ({"query": "roe"}, ["John Roe"]),
        ({"query": "globex"}, ["Jane Doe"]),
        ({"major": "computer science"}, ["Jane Doe"]),
        ({"company": "Initech"}, ["John Roe"]),
        ({"graduationYear": "2023"}, ["John Roe"]),
        ({"keyword": "python"}, ["Jane Doe"]),
        ({"major": "Mathematics", "keyword": "Python"}, []),
    ],
)
def test_search_filters(client, member_headers, seeded, params, expected):
    r = client.get("/api/resumes/search", headers=member_headers, params=params)
    assert [x["name"] for x in r.json()["resumes"]] == expected


def test_filters(client, member_headers, seeded):
    r = client.get("/api/resumes/filters", headers=member_headers)
    assert r.status_code == 200
    assert r.json() == {
        "majors": ["Computer Science", "Mathematics"],
        "graduationYears": ["2023", "2024"],
        "companies": ["Acme Corp", "Bank of America", "Globex", "Initech"],
    }


def test_detail(client, member_headers, seeded):
    jane, _ = seeded
    r = client.get(f"/api/resumes/{jane['id']}", headers=member_headers)
    assert r.status_code == 200
    data = r.json()
    assert data["uploadedBy"] == "admin"
    assert data["keywords"] == ["Python", "SQL"]
    assert data["createdAt"]


def test_detail_not_found(client, member_headers, db_session):
    assert client.get("/api/resumes/999", headers=member_headers).status_code == 404


def test_file_redirects_to_signed_url(client, member_headers, fake_store, seeded):
    jane, _ = seeded
    fake_store.signed_url.return_value = "https://signed.test/jane.pdf"
    r = client.get(f"/api/resumes/{jane['id']}/file", headers=member_headers, follow_redirects=False)
    assert r.status_code == 307
    assert r.headers["location"] == "https://signed.test/jane.pdf"


def test_update_replaces_tags(client, admin_headers, seeded):
    jane, _ = seeded
    r = client.put(
        f"/api/resumes/{jane['id']}",
        headers=admin_headers,
        json={"major": "Data Science", "companies": "initech, INITECH"},
    )
    assert r.status_code == 200
    data = r.json()
    assert data["name"] == "Jane Doe"
    assert data["major"] == "Data Science"
    assert data["companies"] == ["Initech"]
    assert data["keywords"] == ["Python", "SQL"]
    assert data["warnings"] == []


def test_update_reports_capped_tags(client, admin_headers, seeded):
    jane, _ = seeded
    keywords = ",".join(f"skill{i}" for i in range(120))
    r = client.put(f"/api/resumes/{jane['id']}", headers=admin_headers, json={"keywords": keywords})
    assert r.status_code == 200
    data = r.json()
    assert len(data["keywords"]) == 100
    assert data["warnings"] == ["Only the first 100 keywords were kept (120 supplied)."]


def test_update_requires_admin(client, member_headers, seeded):
    jane, _ = seeded
    r = client.put(f"/api/resumes/{jane['id']}", headers=member_headers, json={"major": "Art"})
    assert r.status_code == 401


def test_soft_delete_hides_resume(client, admin_headers, fake_store, seeded):
    jane, john = seeded
    r = client.delete(f"/api/resumes/{jane['id']}", headers=admin_headers)
    assert r.status_code == 200
    fake_store.delete.assert_called_once()

    assert client.get(f"/api/resumes/{jane['id']}", headers=admin_headers).status_code == 404
    search = client.get("/api/resumes/search", headers=admin_headers).json()
    assert [x["id"] for x in search["resumes"]] == [john["id"]]
    filters = client.get("/api/resumes/filters", headers=admin_headers).json()
    assert "Globex" not in filters["companies"]
    assert client.delete(f"/api/resumes/{jane['id']}", headers=admin_headers).status_code == 404


def test_delete_all(client, admin_headers, fake_store, seeded):
    r = client.delete("/api/resumes/all/delete", headers=admin_headers)
    assert r.status_code == 200
    assert r.json() == {"deleted": 2}
    assert fake_store.delete.call_count == 2
    assert client.get("/api/resumes/search", headers=admin_headers).json()["count"] == 0
