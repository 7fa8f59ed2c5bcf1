import uuid
from datetime import timedelta

import pytest

from ecole.models import Student, StudentParentLink
from ecole.services.link_service import (
    LinkFailure,
    LinkRuleViolation,
    claim_link_code,
    find_link_code,
    redeem_link_code,
)
from ecole.utils.datetime import utc_now


@pytest.fixture()
def linkable(make_student, make_parent, make_link):
    student = make_student()
    parent = make_parent()
    link = make_link(student, parent)
    return student, parent, link


def test_redeeming_links_the_parent_and_consumes_the_code(session_factory, linkable):
    student, parent, link = linkable

    with session_factory() as session:
        redeem_link_code(session, student_id=student.id, otp="482913")
        session.commit()

    with session_factory() as session:
        assert session.get(Student, student.id).parent_id == parent.id
        assert session.get(StudentParentLink, link.id).is_used is True


def test_second_redemption_is_refused(session_factory, linkable):
    student, _, _ = linkable
    with session_factory() as session:
        redeem_link_code(session, student_id=student.id, otp="482913")
        session.commit()

    with session_factory() as session, pytest.raises(LinkRuleViolation) as excinfo:
        redeem_link_code(session, student_id=student.id, otp="482913")

    assert excinfo.value.kind is LinkFailure.ALREADY_USED
    assert excinfo.value.detail == "Ce code a déjà été utilisé"
    assert excinfo.value.status_code == 400


def test_unknown_code(session_factory, linkable):
    student, _, _ = linkable

    with session_factory() as session, pytest.raises(LinkRuleViolation) as excinfo:
        redeem_link_code(session, student_id=student.id, otp="000000")

    assert excinfo.value.kind is LinkFailure.NOT_FOUND
    assert excinfo.value.detail == "OTP invalide"


def test_expired_code_is_left_unused(session_factory, make_student, make_parent, make_link):
    student = make_student()
    link = make_link(student, make_parent(), expired_at=utc_now() - timedelta(minutes=1))

    with session_factory() as session, pytest.raises(LinkRuleViolation) as excinfo:
        redeem_link_code(session, student_id=student.id, otp="482913")

    assert excinfo.value.kind is LinkFailure.EXPIRED
    with session_factory() as session:
        stored = session.get(StudentParentLink, link.id)
        assert stored.is_used is False
        assert session.get(Student, student.id).parent_id is None


def test_code_expires_at_its_deadline(session_factory, linkable):
    student, _, link = linkable

    with session_factory() as session, pytest.raises(LinkRuleViolation) as excinfo:
        redeem_link_code(session, student_id=student.id, otp="482913", now=link.expired_at)

    assert excinfo.value.kind is LinkFailure.EXPIRED


def test_unknown_student_does_not_consume_the_code(session_factory, linkable):
    _, _, link = linkable

    with session_factory() as session, pytest.raises(LinkRuleViolation) as excinfo:
        redeem_link_code(session, student_id=uuid.uuid4(), otp="482913")

    assert excinfo.value.kind is LinkFailure.STUDENT_NOT_FOUND
    with session_factory() as session:
        assert session.get(StudentParentLink, link.id).is_used is False


def test_unused_code_is_preferred_over_a_used_duplicate(session, make_student, make_parent, make_link):
    student = make_student()
    parent = make_parent()
    make_link(student, parent, is_used=True)
    fresh = make_link(student, parent)

    assert find_link_code(session, "482913").id == fresh.id


def test_only_one_of_two_concurrent_redemptions_wins(session_factory, make_student, make_parent, make_link):
    first, second = make_student(), make_student(first_name="Awa")
    parent = make_parent()
    link = make_link(first, parent)
    slow, fast = session_factory(), session_factory()
    try:
        seen_by_slow = find_link_code(slow, "482913")
        assert seen_by_slow.is_used is False

        redeem_link_code(fast, student_id=first.id, otp="482913")
        fast.commit()

        assert claim_link_code(slow, seen_by_slow, utc_now()) is False
        with pytest.raises(LinkRuleViolation) as excinfo:
            redeem_link_code(slow, student_id=second.id, otp="482913")
        slow.rollback()
    finally:
        slow.close()
        fast.close()

    assert excinfo.value.kind is LinkFailure.ALREADY_USED
    with session_factory() as session:
        assert session.get(Student, first.id).parent_id == parent.id
        assert session.get(Student, second.id).parent_id is None
        assert session.get(StudentParentLink, link.id).is_used is True
