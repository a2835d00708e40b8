# /tests/test_teacher_results.py

from datetime import datetime, timezone

import pytest

from app.services.results_helpers.teacher_results import get_teacher_results


@pytest.fixture
def two_courses(make_user, make_course, make_exam_result):
    grace = make_user(name="Grace Hopper", role="teacher")
    alan = make_user(name="Alan Turing", role="teacher")
    admin = make_user(name="Ada Admin", role="admin")
    alice = make_user(name="Alice Smith", studentId="S-001")
    bob = make_user(name="Bob Jones", studentId="S-002")
    cs101 = make_course(grace, code="CS101")
    cs102 = make_course(grace, code="CS102", name="Data Structures")
    ma201 = make_course(alan, code="MA201", name="Linear Algebra")

    make_exam_result(cs101, alice, grace, title="Quiz", marks=9, total=10,
                     exam_date=datetime(2025, 2, 1, tzinfo=timezone.utc))
    make_exam_result(cs101, alice, grace, title="Midterm", marks=45, total=50,
                     exam_date=datetime(2025, 3, 1, tzinfo=timezone.utc))
    make_exam_result(cs101, bob, grace, title="Midterm", marks=25, total=50,
                     exam_date=datetime(2025, 3, 1, tzinfo=timezone.utc))
    make_exam_result(ma201, bob, alan, title="Final", marks=70, total=100)
    return {"grace": grace, "alan": alan, "admin": admin, "cs101": cs101, "cs102": cs102, "ma201": ma201}


def test_teacher_sees_only_their_courses(two_courses, db_service):
    """
    GIVEN: Grace owns CS101 (3 results) and CS102 (none); Alan owns MA201.
    WHEN:  Grace asks for her results.
    THEN:  both of her courses are listed, MA201 is not.
    """
    view = get_teacher_results(two_courses["grace"], db_service)

    assert view.summary.totalCourses == 2
    assert view.summary.totalRecords == 3
    assert view.summary.uniqueStudents == 2
    by_code = {c.courseCode: c for c in view.courses}
    assert set(by_code) == {"CS101", "CS102"}
    assert by_code["CS102"].totalRecords == 0
    assert by_code["CS101"].uniqueStudents == 2
    assert by_code["CS101"].results[-1].examTitle == "Quiz"
    assert view.summary.lastImportAt is not None


def test_rows_carry_grade_and_student_details(two_courses, db_service):
    view = get_teacher_results(two_courses["grace"], db_service, course_id=two_courses["cs101"].id)

    rows = {(r.studentNumber, r.examTitle): r for r in view.courses[0].results}
    assert rows[("S-002", "Midterm")].percentage == 50.0
    assert rows[("S-002", "Midterm")].grade == "F"
    assert rows[("S-001", "Midterm")].grade == "A"
    assert rows[("S-001", "Midterm")].uploadedByName == "Grace Hopper"


def test_teacher_filter_is_ignored_for_teachers(two_courses, db_service):
    view = get_teacher_results(two_courses["grace"], db_service, teacher_id=two_courses["alan"].id)

    assert {c.courseCode for c in view.courses} == {"CS101", "CS102"}


def test_foreign_course_filter_gives_an_empty_view(two_courses, db_service):
    view = get_teacher_results(two_courses["grace"], db_service, course_id=two_courses["ma201"].id)

    assert view.summary.totalCourses == 0
    assert view.summary.lastImportAt is None
    assert view.courses == []


def test_admin_sees_everything_or_filters_by_teacher(two_courses, db_service):
    everything = get_teacher_results(two_courses["admin"], db_service)
    alans = get_teacher_results(two_courses["admin"], db_service, teacher_id=two_courses["alan"].id)

    assert everything.summary.totalCourses == 3
    assert everything.summary.totalRecords == 4
    assert [c.courseCode for c in alans.courses] == ["MA201"]
    assert alans.courses[0].teacherName == "Alan Turing"


def test_short_circuits_without_querying_results(mocker, make_user, db_service):
    lonely = make_user(name="New Teacher", role="teacher")
    spy = mocker.spy(db_service, "get_exam_results_for_courses")

    view = get_teacher_results(lonely, db_service)

    assert view.summary.totalCourses == 0
    spy.assert_not_called()
