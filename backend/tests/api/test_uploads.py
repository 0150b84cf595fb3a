# tests/api/test_uploads.py
import re

from fastapi import status

from policy_files.models import Document

PDF_FILE = ("policy.pdf", b"%PDF-1.4 test policy", "application/pdf")


def test_upload_primary_success_skips_database(client, db_session, primary_storage, fallback_storage):
    """Primary write returns name and url only, with no document row"""
    response = client.post("/upload", files={"file": PDF_FILE}, data={"project_id": "proj-1"})

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert set(data) == {"name", "url"}
    assert re.fullmatch(r"\d+_policy\.pdf", data["name"])
    assert data["url"] == f"https://firebase.example/signed/{data['name']}?ttl=3600"
    assert primary_storage.objects[data["name"]] == (PDF_FILE[1], "application/pdf")
    assert fallback_storage.put_calls == []
    assert db_session.query(Document).count() == 0


def test_upload_fallback_records_document(client, db_session, primary_storage, fallback_storage):
    """Fallback write persists a pending Upload row pointing at the stored object"""
    primary_storage.fail_put = True

    response = client.post("/upload", files={"file": PDF_FILE}, data={"project_id": "proj-1"})

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["message"] == "upload successfully"
    assert data["url"] == f"https://supabase.example/signed/{data['name']}?ttl=3600"
    assert data["name"] in fallback_storage.objects

    document = db_session.query(Document).filter(Document.id == data["document_id"]).one()
    assert document.file_path == data["name"]
    assert document.filename == "policy.pdf"
    assert document.project_id == "proj-1"
    assert document.source == "Upload"
    assert document.status == "pending"
    assert document.document_content is None


def test_upload_without_file(client, primary_storage, fallback_storage):
    """Missing file is rejected before any storage call"""
    response = client.post("/upload", data={"project_id": "proj-1"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"error": "No file uploaded"}
    assert primary_storage.put_calls == []
    assert fallback_storage.put_calls == []


def test_fallback_upload_without_project_id_leaves_orphan(client, db_session, primary_storage, fallback_storage):
    """The object stays in storage even though the request is rejected"""
    primary_storage.fail_put = True

    response = client.post("/upload", files={"file": PDF_FILE})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"error": "project_id is required"}
    assert len(fallback_storage.objects) == 1
    assert db_session.query(Document).count() == 0


def test_primary_upload_does_not_need_project_id(client, primary_storage):
    response = client.post("/upload", files={"file": PDF_FILE})

    assert response.status_code == status.HTTP_200_OK
    assert len(primary_storage.objects) == 1


def test_both_backends_failing(client, primary_storage, fallback_storage):
    primary_storage.fail_put = True
    fallback_storage.fail_put = True

    response = client.post("/upload", files={"file": PDF_FILE}, data={"project_id": "proj-1"})

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"error": "supabase write refused"}


def test_primary_signed_url_failure_is_terminal(client, primary_storage, fallback_storage):
    primary_storage.fail_sign = True

    response = client.post("/upload", files={"file": PDF_FILE}, data={"project_id": "proj-1"})

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"error": "firebase cannot sign"}
    assert fallback_storage.put_calls == []


def test_fallback_upload_without_database(client_without_database, primary_storage, fallback_storage):
    primary_storage.fail_put = True

    response = client_without_database.post("/upload", files={"file": PDF_FILE}, data={"project_id": "proj-1"})

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"error": "DATABASE_URL not configured"}
    assert len(fallback_storage.objects) == 1


def test_fallback_signed_url_failure(client, db_session, primary_storage, fallback_storage):
    """The fallback object is written but no row is recorded when it cannot be signed"""
    primary_storage.fail_put = True
    fallback_storage.fail_sign = True

    response = client.post("/upload", files={"file": PDF_FILE}, data={"project_id": "proj-1"})

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"error": "supabase cannot sign"}
    assert len(fallback_storage.objects) == 1
    assert db_session.query(Document).count() == 0


def test_unexpected_error_returns_json_body(error_client, primary_storage, fallback_storage):
    """Errors outside the typed taxonomy still answer with an error body"""
    primary_storage.put_error = RuntimeError("socket closed mid-upload")

    response = error_client.post("/upload", files={"file": PDF_FILE}, data={"project_id": "proj-1"})

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.headers["content-type"] == "application/json"
    assert response.json() == {"error": "socket closed mid-upload"}
