# /tests/test_assignment_service.py

import io
from datetime import datetime, timedelta, timezone

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from app.models import assignment_model
from app.models.assignment_model import AssignmentCreate, GradeRequest
from app.services import assignment_service

from conftest import BASE_TIME


@pytest.fixture
def classroom(make_user, make_course, make_assignment):
    grace = make_user(name="Grace Hopper", role="teacher")
    alan = make_user(name="Alan Turing", role="teacher")
    admin = make_user(name="Ada Admin", role="admin")
    alice = make_user(name="Alice Smith")
    bob = make_user(name="Bob Jones")
    course = make_course(grace)
    assignment = make_assignment(course, title="Homework 1", points=50)
    return {"grace": grace, "alan": alan, "admin": admin, "alice": alice, "bob": bob,
            "course": course, "assignment": assignment}


def _upload(content=b"print('hello')", filename="solution.py"):
    return UploadFile(file=io.BytesIO(content), filename=filename,
                      headers=Headers({"content-type": "text/x-python"}))


def test_create_assignment_normalises_due_date(classroom, db_service):
    data = AssignmentCreate(title="  Lab 2 ", courseId=classroom["course"].id,
                            dueDate=datetime(2025, 4, 1, 12, 0), points=20)

    created = assignment_service.create_assignment(data, db_service, classroom["grace"])

    assert created["title"] == "Lab 2"
    assert created["teacherId"] == classroom["grace"].id
    assert created["courseCode"] == "CS101"
    assert created["points"] == 20


def test_other_teacher_cannot_create_or_grade(classroom, make_submission, db_service):
    data = AssignmentCreate(title="Lab 2", courseId=classroom["course"].id, dueDate=BASE_TIME)
    submission = make_submission(classroom["assignment"], classroom["alice"])

    with pytest.raises(PermissionError):
        assignment_service.create_assignment(data, db_service, classroom["alan"])
    with pytest.raises(PermissionError):
        assignment_service.grade_submission(
            classroom["assignment"].id, GradeRequest(submissionId=submission.id, grade=10),
            db_service, classroom["alan"],
        )


def test_admin_created_assignment_belongs_to_course_teacher(classroom, db_service):
    data = AssignmentCreate(title="Lab 3", courseId=classroom["course"].id, dueDate=BASE_TIME)

    created = assignment_service.create_assignment(data, db_service, classroom["admin"])

    assert created["teacherId"] == classroom["grace"].id


def test_unknown_course_returns_none(classroom, db_service):
    data = AssignmentCreate(title="Lab", courseId="crs_missing", dueDate=BASE_TIME)
    assert assignment_service.create_assignment(data, db_service, classroom["grace"]) is None


def test_grade_is_bounded_by_points(classroom, make_submission, db_service):
    submission = make_submission(classroom["assignment"], classroom["alice"])

    with pytest.raises(ValueError, match="between 0 and 50"):
        assignment_service.grade_submission(
            classroom["assignment"].id, GradeRequest(submissionId=submission.id, grade=51),
            db_service, classroom["grace"],
        )

    graded = assignment_service.grade_submission(
        classroom["assignment"].id, GradeRequest(submissionId=submission.id, grade=45, feedback="Nice"),
        db_service, classroom["grace"],
    )
    stored = graded["submissions"][0]
    assert stored["grade"] == 45
    assert stored["feedback"] == "Nice"
    assert stored["gradedBy"] == classroom["grace"].id
    assert stored["gradedAt"] is not None


def test_grading_a_missing_submission_returns_none(classroom, db_service):
    result = assignment_service.grade_submission(
        classroom["assignment"].id, GradeRequest(submissionId="sub_missing", grade=1),
        db_service, classroom["grace"],
    )
    assert result is None


def test_students_only_see_their_own_submission(classroom, make_submission, db_service):
    make_submission(classroom["assignment"], classroom["alice"])
    make_submission(classroom["assignment"], classroom["bob"])

    as_alice = assignment_service.get_assignment(classroom["assignment"].id, db_service, classroom["alice"])
    as_grace = assignment_service.get_assignment(classroom["assignment"].id, db_service, classroom["grace"])

    assert [s["studentId"] for s in as_alice["submissions"]] == [classroom["alice"].id]
    assert len(as_grace["submissions"]) == 2


def test_list_assignments_is_scoped_for_teachers(classroom, make_course, make_assignment, db_service):
    make_assignment(make_course(classroom["alan"], code="MA201"), title="Proofs")

    grace_view = assignment_service.list_assignments(db_service, classroom["grace"])
    admin_view = assignment_service.list_assignments(db_service, classroom["admin"])

    assert [a["title"] for a in grace_view] == ["Homework 1"]
    assert len(admin_view) == 2


@pytest.mark.asyncio
async def test_resubmitting_replaces_the_single_submission(classroom, db_service, tmp_path):
    assignment_id = classroom["assignment"].id

    await assignment_service.submit_assignment(
        assignment_id, _upload(filename="v1.py"), db_service, classroom["alice"], upload_dir=str(tmp_path))
    view = await assignment_service.submit_assignment(
        assignment_id, _upload(b"print('v2')", filename="v2.py"), db_service, classroom["alice"],
        upload_dir=str(tmp_path))

    assert len(view["submissions"]) == 1
    assert view["submissions"][0]["fileName"] == "v2.py"
    assert view["submissions"][0]["fileSize"] == str(len(b"print('v2')"))
    assert len(list(tmp_path.iterdir())) == 2


@pytest.mark.asyncio
async def test_empty_submission_is_rejected(classroom, db_service, tmp_path):
    with pytest.raises(ValueError, match="Please upload a file."):
        await assignment_service.submit_assignment(
            classroom["assignment"].id, _upload(b""), db_service, classroom["alice"], upload_dir=str(tmp_path))


@pytest.mark.asyncio
async def test_submission_file_is_written_off_the_event_loop(classroom, db_service, tmp_path, mocker):
    from app.services import file_storage
    spy = mocker.spy(file_storage.asyncio, "to_thread")

    await assignment_service.submit_assignment(
        classroom["assignment"].id, _upload(), db_service, classroom["alice"], upload_dir=str(tmp_path))

    assert spy.call_count == 1
    assert spy.call_args.args[0] is file_storage._write_file


# --- Status filter, update and delete ---

def test_status_filter_splits_upcoming_and_past(classroom, make_assignment, db_service):
    """
    GIVEN one assignment due on 8 March and one due on 7 April
    WHEN listing with status=upcoming / past as of 20 March
    THEN each list holds only the matching assignment
    """
    make_assignment(classroom["course"], title="Project", created_at=BASE_TIME + timedelta(days=30))
    now = BASE_TIME + timedelta(days=19)

    upcoming = assignment_service.list_assignments(db_service, classroom["grace"], status="upcoming", now=now)
    past = assignment_service.list_assignments(db_service, classroom["grace"], status="past", now=now)
    everything = assignment_service.list_assignments(db_service, classroom["grace"], now=now)

    assert [a["title"] for a in upcoming] == ["Project"]
    assert [a["title"] for a in past] == ["Homework 1"]
    assert len(everything) == 2


def test_owner_can_update_only_the_fields_sent(classroom, db_service):
    new_due = datetime(2025, 4, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))
    update = assignment_model.AssignmentUpdate(title="  Homework 1 (revised) ", dueDate=new_due)

    view = assignment_service.update_assignment(classroom["assignment"].id, update, db_service, classroom["grace"])

    assert view["title"] == "Homework 1 (revised)"
    assert view["dueDate"].replace(tzinfo=timezone.utc) == datetime(2025, 4, 1, 10, 0, tzinfo=timezone.utc)
    assert view["points"] == 50


def test_other_teacher_cannot_update_or_delete(classroom, db_service):
    update = assignment_model.AssignmentUpdate(title="Hijacked")

    with pytest.raises(PermissionError):
        assignment_service.update_assignment(classroom["assignment"].id, update, db_service, classroom["alan"])
    with pytest.raises(PermissionError):
        assignment_service.delete_assignment(classroom["assignment"].id, db_service, classroom["alan"])


def test_points_cannot_drop_below_an_existing_grade(classroom, make_submission, db_service):
    make_submission(classroom["assignment"], classroom["alice"], grade=40)

    with pytest.raises(ValueError, match="lower than an existing grade"):
        assignment_service.update_assignment(
            classroom["assignment"].id, assignment_model.AssignmentUpdate(points=30), db_service, classroom["grace"])

    view = assignment_service.update_assignment(
        classroom["assignment"].id, assignment_model.AssignmentUpdate(points=40), db_service, classroom["admin"])
    assert view["points"] == 40


def test_delete_removes_assignment_and_submissions(classroom, make_submission, db_service, session):
    from app.db.base import Submission
    make_submission(classroom["assignment"], classroom["alice"], grade=40)

    assert assignment_service.delete_assignment(classroom["assignment"].id, db_service, classroom["grace"]) is True
    assert db_service.get_assignment(classroom["assignment"].id) is None
    assert session.query(Submission).count() == 0
    assert assignment_service.delete_assignment(classroom["assignment"].id, db_service, classroom["grace"]) is False
