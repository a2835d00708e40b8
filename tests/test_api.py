# /tests/test_api.py

"""
End-to-end checks through the FastAPI app: real bearer tokens, role
gates, and the status codes each router maps service outcomes onto.
"""

import pytest
from fastapi.testclient import TestClient

from app.core import config
from app.core.security import create_access_token
from app.main import app
from app.services.database_service import DatabaseService, get_db_service

from conftest import RESULT_HEADERS


@pytest.fixture
def client(session, tmp_path, monkeypatch):
    """A TestClient wired to the per-test SQLite session and a temp upload dir."""
    def _override():
        yield DatabaseService(db_session=session)

    monkeypatch.setattr(config, "UPLOAD_DIR", str(tmp_path / "uploads"))
    app.dependency_overrides[get_db_service] = _override
    # No context manager, so the lifespan hook never touches the real database.
    yield TestClient(app)
    app.dependency_overrides.clear()


def auth(user):
    return {"Authorization": f"Bearer {create_access_token(subject=user.id)}"}


@pytest.fixture
def people(make_user, make_course):
    grace = make_user(name="Grace Hopper", email="grace@campus.edu", role="teacher")
    alan = make_user(name="Alan Turing", email="alan@campus.edu", role="teacher")
    alice = make_user(name="Alice Smith", email="alice@campus.edu")
    make_course(grace, code="CS101")
    make_course(alan, code="MA201", name="Linear Algebra")
    return {"grace": grace, "alan": alan, "alice": alice}


def _xlsx(write_workbook, rows):
    with open(write_workbook(rows), "rb") as f:
        return f.read()


XLSX_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


# --- Auth ---

def test_register_login_and_me(client):
    payload = {
        "name": "Dana Scully", "email": "Dana@Campus.edu", "password": "secret-pass",
        "role": "student", "department": "Physics", "studentId": "S-900",
    }
    created = client.post("/api/auth/register", json=payload)
    duplicate = client.post("/api/auth/register", json=payload)
    token = client.post("/api/auth/token", data={"username": "dana@campus.edu", "password": "secret-pass"})
    wrong = client.post("/api/auth/token", data={"username": "dana@campus.edu", "password": "nope"})

    assert created.status_code == 201
    assert created.json()["email"] == "dana@campus.edu"
    assert "hashed_password" not in created.json()
    assert duplicate.status_code == 400
    assert wrong.status_code == 401

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token.json()['access_token']}"})
    assert me.status_code == 200
    assert me.json()["studentId"] == "S-900"


def test_missing_or_bad_token_is_rejected(client):
    assert client.get("/api/results/me").status_code == 401
    assert client.get("/api/results/me", headers={"Authorization": "Bearer garbage"}).status_code == 401


# --- Results ---

def test_teacher_upload_returns_import_summary(client, people, write_workbook):
    content = _xlsx(write_workbook, [
        RESULT_HEADERS,
        ["alice@campus.edu", "CS101", "Midterm", 45, 50],
        ["alice@campus.edu", "MA201", "Midterm", 45, 50],
    ])

    response = client.post(
        "/api/results/upload",
        files={"file": ("midterm.xlsx", content, XLSX_TYPE)},
        headers=auth(people["grace"]),
    )

    assert response.status_code == 201
    body = response.json()
    assert (body["processed"], body["created"], body["skipped"]) == (2, 1, 1)
    assert body["errors"] == [{"row": 3, "message": "You are not assigned to this course."}]
    print("\n✅ SUCCESS: test_teacher_upload_returns_import_summary passed.")


def test_upload_structural_errors_are_400(client, people, write_workbook):
    bad_header = _xlsx(write_workbook, [["Student Email", "Course Code"]])

    missing_columns = client.post(
        "/api/results/upload", files={"file": ("bad.xlsx", bad_header, XLSX_TYPE)}, headers=auth(people["grace"]))
    wrong_type = client.post(
        "/api/results/upload", files={"file": ("notes.txt", b"hello", "text/plain")}, headers=auth(people["grace"]))

    assert missing_columns.status_code == 400
    assert missing_columns.json()["detail"].startswith("Missing required columns")
    assert wrong_type.status_code == 400

    no_file = client.post("/api/results/upload", headers=auth(people["grace"]))
    assert no_file.status_code == 400


def test_students_cannot_upload_or_see_the_teacher_view(client, people, write_workbook):
    content = _xlsx(write_workbook, [RESULT_HEADERS])

    upload = client.post(
        "/api/results/upload", files={"file": ("r.xlsx", content, XLSX_TYPE)}, headers=auth(people["alice"]))
    overview = client.get("/api/results/teacher", headers=auth(people["alice"]))

    assert upload.status_code == 403
    assert overview.status_code == 403


def test_student_sees_uploaded_exam_in_my_results(client, people, write_workbook):
    content = _xlsx(write_workbook, [RESULT_HEADERS, ["alice@campus.edu", "CS101", "Midterm", 45, 50]])
    client.post("/api/results/upload", files={"file": ("m.xlsx", content, XLSX_TYPE)}, headers=auth(people["grace"]))

    mine = client.get("/api/results/me", headers=auth(people["alice"])).json()
    overview = client.get("/api/results/teacher", headers=auth(people["grace"])).json()

    assert mine["totalGraded"] == 1
    assert mine["overallAverage"] == 90.0
    assert mine["assignments"][0]["type"] == "exam"
    assert overview["summary"]["totalRecords"] == 1
    assert overview["courses"][0]["results"][0]["grade"] == "A"


# --- Courses, assignments, dashboard, achievements ---

def test_assignment_flow_over_http(client, people):
    grace, alice = people["grace"], people["alice"]
    courses = client.get("/api/courses", headers=auth(grace)).json()
    course_id = next(c["id"] for c in courses if c["code"] == "CS101")

    enrolled = client.put(f"/api/courses/{course_id}/enroll", headers=auth(alice))
    enrolled_again = client.put(f"/api/courses/{course_id}/enroll", headers=auth(alice))
    created = client.post("/api/assignments", json={
        "title": "Homework 1", "courseId": course_id, "dueDate": "2099-01-01T00:00:00Z", "points": 50,
    }, headers=auth(grace))
    assignment_id = created.json()["id"]

    dashboard = client.get("/api/dashboard/summary", headers=auth(alice)).json()
    submitted = client.post(
        f"/api/assignments/{assignment_id}/submit",
        files={"file": ("hw1.py", b"print(1)", "text/x-python")},
        headers=auth(alice),
    )
    submission_id = submitted.json()["submissions"][0]["id"]
    too_high = client.put(f"/api/assignments/{assignment_id}/grade",
                          json={"submissionId": submission_id, "grade": 60}, headers=auth(grace))
    by_stranger = client.put(f"/api/assignments/{assignment_id}/grade",
                             json={"submissionId": submission_id, "grade": 40}, headers=auth(people["alan"]))
    graded = client.put(f"/api/assignments/{assignment_id}/grade",
                        json={"submissionId": submission_id, "grade": 50}, headers=auth(grace))
    achievements = client.get("/api/achievements", headers=auth(alice)).json()

    assert enrolled.status_code == 200
    assert enrolled.json()["studentCount"] == 1
    assert enrolled_again.status_code == 400
    assert created.status_code == 201
    assert dashboard["activeCourses"] == 1
    assert dashboard["upcomingAssignments"] == 1
    assert submitted.status_code == 200
    assert too_high.status_code == 400
    assert by_stranger.status_code == 403
    assert graded.status_code == 200
    assert achievements["classRank"] == 1
    assert achievements["leaderboard"][0]["medal"] == "gold"


def test_unknown_assignment_is_404(client, people):
    response = client.get("/api/assignments/asg_missing", headers=auth(people["grace"]))
    assert response.status_code == 404


def test_course_creation_rules(client, people):
    body = {
        "code": "ph110", "name": "Mechanics", "department": "Physics", "credits": 4,
        "schedule": [{"day": "Tuesday", "startTime": "10:00", "endTime": "11:30", "room": "B2"}],
    }

    created = client.post("/api/courses", json=body, headers=auth(people["grace"]))
    duplicate = client.post("/api/courses", json=body, headers=auth(people["alan"]))
    by_student = client.post("/api/courses", json=body, headers=auth(people["alice"]))

    assert created.status_code == 201
    assert created.json()["code"] == "PH110"
    assert created.json()["teacher"]["name"] == "Grace Hopper"
    assert duplicate.status_code == 400
    assert by_student.status_code == 403


def _course_id(client, user, code="CS101"):
    return next(c["id"] for c in client.get("/api/courses", headers=auth(user)).json() if c["code"] == code)


# --- Profile ---

def test_profile_update_over_http(client, people):
    updated = client.put("/api/auth/me", json={"name": "Alice Cooper", "phone": "9876543210"},
                         headers=auth(people["alice"]))
    bad_name = client.put("/api/auth/me", json={"name": "R2-D2"}, headers=auth(people["alice"]))
    taken = client.put("/api/auth/me", json={"email": "grace@campus.edu"}, headers=auth(people["alice"]))
    malformed = client.put("/api/auth/me", json={"email": "not-an-email"}, headers=auth(people["alice"]))

    assert updated.status_code == 200
    assert (updated.json()["name"], updated.json()["phone"]) == ("Alice Cooper", "9876543210")
    assert bad_name.status_code == 400
    assert taken.json()["detail"] == "Email already in use"
    assert malformed.status_code == 422


# --- Course and assignment maintenance ---

def test_course_update_resources_and_delete_over_http(client, people):
    course_id = _course_id(client, people["grace"])

    renamed = client.put(f"/api/courses/{course_id}", json={"name": "Programming I"}, headers=auth(people["grace"]))
    by_stranger = client.put(f"/api/courses/{course_id}", json={"name": "Mine"}, headers=auth(people["alan"]))
    resource = client.post(f"/api/courses/{course_id}/resources",
                           json={"title": "Syllabus", "fileUrl": "https://files/syllabus.pdf"},
                           headers=auth(people["grace"]))
    details = client.get(f"/api/courses/{course_id}", headers=auth(people["alice"])).json()
    delete_by_student = client.delete(f"/api/courses/{course_id}", headers=auth(people["alice"]))
    deleted = client.delete(f"/api/courses/{course_id}", headers=auth(people["grace"]))

    assert renamed.status_code == 200
    assert renamed.json()["name"] == "Programming I"
    assert by_stranger.status_code == 403
    assert resource.status_code == 201
    assert details["resources"][0]["title"] == "Syllabus"
    assert delete_by_student.status_code == 403
    assert deleted.status_code == 204
    assert client.get(f"/api/courses/{course_id}", headers=auth(people["grace"])).status_code == 404
    assert client.delete(f"/api/courses/{course_id}", headers=auth(people["grace"])).status_code == 404


def test_assignment_status_filter_update_and_delete_over_http(client, people):
    grace = people["grace"]
    course_id = _course_id(client, grace)
    future = client.post("/api/assignments", json={
        "title": "Project", "courseId": course_id, "dueDate": "2099-01-01T00:00:00Z"}, headers=auth(grace)).json()
    client.post("/api/assignments", json={
        "title": "Warm-up", "courseId": course_id, "dueDate": "2001-01-01T00:00:00Z"}, headers=auth(grace))

    upcoming = client.get("/api/assignments?status=upcoming", headers=auth(grace)).json()
    past = client.get("/api/assignments?status=past", headers=auth(grace)).json()
    bad_status = client.get("/api/assignments?status=soon", headers=auth(grace))
    updated = client.put(f"/api/assignments/{future['id']}", json={"points": 80}, headers=auth(grace))
    by_stranger = client.delete(f"/api/assignments/{future['id']}", headers=auth(people["alan"]))
    deleted = client.delete(f"/api/assignments/{future['id']}", headers=auth(grace))

    assert [a["title"] for a in upcoming] == ["Project"]
    assert [a["title"] for a in past] == ["Warm-up"]
    assert bad_status.status_code == 422
    assert updated.json()["points"] == 80
    assert by_stranger.status_code == 403
    assert deleted.status_code == 204
    assert client.get(f"/api/assignments/{future['id']}", headers=auth(grace)).status_code == 404


# --- Attendance ---

def test_attendance_flow_over_http(client, people):
    grace, alice = people["grace"], people["alice"]
    course_id = _course_id(client, grace)
    client.put(f"/api/courses/{course_id}/enroll", headers=auth(alice))

    marked = client.post("/api/attendance/mark-bulk", json={
        "courseId": course_id, "date": "2025-03-03",
        "attendanceData": [{"studentId": alice.id, "status": "present"}, {"studentId": alice.id, "status": "bogus"}],
    }, headers=auth(grace))
    by_other_teacher = client.post("/api/attendance/mark-bulk", json={
        "courseId": course_id, "date": "2025-03-03", "attendanceData": [{"studentId": alice.id, "status": "absent"}],
    }, headers=auth(people["alan"]))
    mine = client.get("/api/attendance", headers=auth(alice)).json()
    register = client.get(f"/api/attendance/course/{course_id}?date=2025-03-03", headers=auth(grace))
    register_by_student = client.get(f"/api/attendance/course/{course_id}", headers=auth(alice))
    missing_course = client.get("/api/attendance/course/crs_missing", headers=auth(grace))

    assert marked.status_code == 201
    assert marked.json()["count"] == 1
    assert by_other_teacher.status_code == 403
    assert mine["overall"] == 100
    assert mine["subjectWise"][0]["code"] == "CS101"
    assert register.json()["records"][0]["status"] == "present"
    assert register_by_student.status_code == 403
    assert missing_course.status_code == 404


def test_attendance_exports_are_excel_downloads(client, people):
    faculty = client.get("/api/attendance/export/faculty", headers=auth(people["grace"]))
    student = client.get("/api/attendance/export/student", headers=auth(people["alice"]))
    faculty_by_student = client.get("/api/attendance/export/faculty", headers=auth(people["alice"]))

    assert faculty.status_code == 200
    assert faculty.headers["content-type"].startswith(XLSX_TYPE)
    assert "filename=Attendance_Report_" in faculty.headers["content-disposition"]
    assert faculty.content[:2] == b"PK"
    assert student.status_code == 200
    assert f"filename=My_Attendance_{people['alice'].id}_" in student.headers["content-disposition"]
    assert faculty_by_student.status_code == 403


# --- Timetable ---

def test_timetable_flow_over_http(client, people):
    grace, alice = people["grace"], people["alice"]
    course_id = _course_id(client, grace)
    client.put(f"/api/courses/{course_id}/enroll", headers=auth(alice))
    slot = {"courseId": course_id, "day": "Monday", "startTime": "09:00", "endTime": "10:00", "room": "A1"}

    created = client.post("/api/timetable", json=slot, headers=auth(grace))
    by_student = client.post("/api/timetable", json=slot, headers=auth(alice))
    backwards = client.post("/api/timetable", json={**slot, "endTime": "08:00"}, headers=auth(grace))
    entry_id = created.json()["id"]
    week = client.get("/api/timetable", headers=auth(alice)).json()
    moved_by_stranger = client.put(f"/api/timetable/{entry_id}", json={"room": "Z9"}, headers=auth(people["alan"]))
    moved = client.put(f"/api/timetable/{entry_id}", json={"room": "B2"}, headers=auth(grace))
    deleted = client.delete(f"/api/timetable/{entry_id}", headers=auth(grace))

    assert created.status_code == 201
    assert created.json()["professorName"] == "Grace Hopper"
    assert by_student.status_code == 403
    assert backwards.status_code == 422
    assert [e["id"] for e in week["timetable"]] == [entry_id]
    assert moved_by_stranger.status_code == 403
    assert moved.json()["room"] == "B2"
    assert deleted.status_code == 204
    assert client.delete(f"/api/timetable/{entry_id}", headers=auth(grace)).status_code == 404


# --- Notes and bus tracking ---

def test_notes_flow_over_http(client, people):
    course_id = _course_id(client, people["grace"])

    created = client.post(
        "/api/notes",
        data={"title": "Loops", "courseId": course_id, "tag": "Important", "pages": "3"},
        files={"file": ("loops.pdf", b"%PDF-1.4", "application/pdf")},
        headers=auth(people["alice"]),
    )
    no_file = client.post("/api/notes", data={"title": "Empty", "subject": "Maths"}, headers=auth(people["alice"]))
    bad_course = client.post(
        "/api/notes", data={"title": "Lost", "courseId": "crs_missing"},
        files={"file": ("x.pdf", b"x", "application/pdf")}, headers=auth(people["alice"]))
    note_id = created.json()["id"]
    listed = client.get("/api/notes?subject=All", headers=auth(people["grace"])).json()
    download = client.get(f"/api/notes/{note_id}/download", headers=auth(people["grace"]))
    fetched = client.get(f"/api/notes/{note_id}", headers=auth(people["grace"])).json()
    missing = client.get("/api/notes/nte_missing", headers=auth(people["grace"]))

    assert created.status_code == 201
    assert (created.json()["subject"], created.json()["tag"], created.json()["pages"]) == ("Intro to Programming", "Important", 3)
    assert no_file.status_code == 400
    assert bad_course.status_code == 404
    assert bad_course.json()["detail"] == "Selected course not found"
    assert [n["id"] for n in listed] == [note_id]
    assert download.json()["fileName"] == "loops.pdf"
    assert fetched["downloadCount"] == 1
    assert missing.json()["detail"] == "Note not found with id of nte_missing"


def test_bus_tracking_over_http(client, people, session):
    from app.db.base import Bus
    session.add(Bus(id="bus_1", route_number="R1", route_name="City Express", is_active=True, stops=[]))
    session.commit()

    buses = client.get("/api/bus-tracking", headers=auth(people["alice"]))
    missing = client.get("/api/bus-tracking/bus_missing", headers=auth(people["alice"]))

    assert [b["routeName"] for b in buses.json()] == ["City Express"]
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Bus not found with id of bus_missing"
