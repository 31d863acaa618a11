from __future__ import annotations

import io
import json
from types import SimpleNamespace

import pytest
from flask import Flask

from campus_attendance.imports.controller import register


@pytest.fixture
def client(service, audit_repo):
    app = Flask(__name__)
    app.secret_key = "test-secret"
    app.config["TESTING"] = True
    register(app, SimpleNamespace(import_service=service))
    return app.test_client()


def _login(client, role="admin", user_id=1):
    with client.session_transaction() as sess:
        sess["user_id"] = user_id
        sess["role"] = role


def _upload(client, entity_type, content, **form):
    data = {"file": (io.BytesIO(content.encode("utf-8")), "upload.csv"), **form}
    return client.post(f"/admin/import/{entity_type}", data=data, content_type="multipart/form-data")


def test_requires_login(client):
    resp = _upload(client, "subjects", "Name,Code,Department,Year\nMaths,M1,AIML,1\n")

    assert resp.status_code == 401


def test_requires_admin_role(client):
    _login(client, role="faculty")

    resp = client.get("/admin/import/subjects/sample")

    assert resp.status_code == 403


def test_upload_returns_result_and_audits(client, subjects_repo, audit_repo):
    _login(client)

    resp = _upload(client, "subjects", "Name,Code,Department,Year\nMaths,M1,AIML,1\nPhysics,P1,CS,9\n")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["inserted"] == 1
    assert body["failed"] == 1
    assert body["errors"] == ["Row 2: Year - Year must be between 1 and 4"]
    assert subjects_repo.find_by_key("M1").year == "1st Year"
    assert audit_repo.entries[0].action == "Bulk subjects Import"


def test_mapping_form_field_enables_update(client, students_repo):
    _login(client)
    mapping = json.dumps({"Student": "name", "Roll": "roll_no", "Dept": "department", "Yr": "year"})
    _upload(client, "students", "Student,Roll,Dept,Yr\nAda,R1,AIML,1\n", mapping=mapping)

    resp = _upload(client, "students", "Student,Roll,Dept,Yr\nAda L,R1,AIML,1\n", mapping=mapping)

    assert resp.get_json()["updated"] == 1
    assert students_repo.find_by_key("R1").name == "Ada L"


def test_precondition_errors_are_bad_requests(client):
    _login(client)

    empty = _upload(client, "students", "Name,RollNo,Department,Year\n")
    missing = _upload(client, "timetable", "Subject,Department\nMaths,AIML\n")
    bad_mapping = _upload(client, "students", "A\nb\n", mapping="[1, 2]")

    assert empty.status_code == 400
    assert missing.status_code == 400
    assert missing.get_json()["message"].startswith("Missing required columns: classroom, year, day, time")
    assert bad_mapping.status_code == 400


def test_missing_file_is_bad_request(client):
    _login(client)

    resp = client.post("/admin/import/students", data={}, content_type="multipart/form-data")

    assert resp.status_code == 400


def test_unknown_entity_is_not_found(client):
    _login(client)

    assert _upload(client, "parents", "a,b\n1,2\n").status_code == 404
    assert client.get("/admin/import/parents/sample").status_code == 404


def test_sample_download(client):
    _login(client)

    resp = client.get("/admin/import/timetable/sample")

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert "sample-timetable.csv" in resp.headers["Content-Disposition"]
    assert resp.get_data(as_text=True).startswith("SubjectName,Department,Year,DayOfWeek,Time,ClassroomNumber")
