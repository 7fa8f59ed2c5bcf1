"""Redemption of one-time codes linking a parent to a student."""

from __future__ import annotations

import enum
import logging
from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import Student, StudentParentLink
from ..utils.datetime import is_expired, to_naive_utc, utc_now

logger = logging.getLogger(__name__)


class LinkFailure(str, enum.Enum):
    """User-facing failure kinds of a redemption attempt."""

    NOT_FOUND = "NOT_FOUND"
    ALREADY_USED = "ALREADY_USED"
    EXPIRED = "EXPIRED"
    STUDENT_NOT_FOUND = "STUDENT_NOT_FOUND"
    UNEXPECTED = "UNEXPECTED"


LINK_FAILURE_MESSAGES: dict[LinkFailure, str] = {
    LinkFailure.NOT_FOUND: "OTP invalide",
    LinkFailure.ALREADY_USED: "Ce code a déjà été utilisé",
    LinkFailure.EXPIRED: "Ce code a expiré",
    LinkFailure.STUDENT_NOT_FOUND: "Élève introuvable",
    LinkFailure.UNEXPECTED: "Une erreur est survenue lors de la liaison de l'élève au parent",
}

_STATUS_CODES: dict[LinkFailure, int] = {
    LinkFailure.NOT_FOUND: 404,
    LinkFailure.ALREADY_USED: 400,
    LinkFailure.EXPIRED: 400,
    LinkFailure.STUDENT_NOT_FOUND: 404,
    LinkFailure.UNEXPECTED: 500,
}

LINK_SUCCESS_MESSAGE = "Élève lié au parent avec succès"


class LinkRuleViolation(Exception):
    """Raised when a code cannot be redeemed."""

    def __init__(self, kind: LinkFailure) -> None:
        self.kind = kind
        self.detail = LINK_FAILURE_MESSAGES[kind]
        self.status_code = _STATUS_CODES[kind]
        super().__init__(self.detail)


def find_link_code(session: Session, otp: str) -> Optional[StudentParentLink]:
    """Return the newest record carrying ``otp``, preferring one still unused."""

    stmt = (
        select(StudentParentLink)
        .where(StudentParentLink.otp == otp)
        .order_by(StudentParentLink.is_used.asc(), StudentParentLink.created_at.desc())
        .limit(1)
    )
    return session.execute(stmt).scalar_one_or_none()


def claim_link_code(session: Session, link: StudentParentLink, now: datetime) -> bool:
    """Mark the code used only if it is still unused and unexpired.

    The conditional update is the single point deciding which concurrent
    redemption wins; exactly one caller sees a row count of 1.
    """

    stmt = (
        update(StudentParentLink)
        .where(
            StudentParentLink.id == link.id,
            StudentParentLink.is_used.is_(False),
            StudentParentLink.expired_at > now,
        )
        .values(is_used=True)
        .execution_options(synchronize_session=False)
    )
    result = session.execute(stmt)
    return result.rowcount == 1


def _check_state(link: StudentParentLink, now: datetime) -> None:
    if link.is_used:
        raise LinkRuleViolation(LinkFailure.ALREADY_USED)
    if is_expired(link.expired_at, now):
        raise LinkRuleViolation(LinkFailure.EXPIRED)


def _redeem(session: Session, student_id: UUID, otp: str, now: datetime) -> StudentParentLink:
    link = find_link_code(session, otp)
    if link is None:
        raise LinkRuleViolation(LinkFailure.NOT_FOUND)
    _check_state(link, now)

    student = session.get(Student, student_id)
    if student is None:
        raise LinkRuleViolation(LinkFailure.STUDENT_NOT_FOUND)

    if not claim_link_code(session, link, now):
        # Lost the race: reload to report the state the winner left behind.
        session.refresh(link)
        _check_state(link, now)
        raise LinkRuleViolation(LinkFailure.ALREADY_USED)

    student.parent_id = link.parent_id
    session.flush()
    session.refresh(link)
    return link


def redeem_link_code(
    session: Session,
    *,
    student_id: UUID,
    otp: str,
    now: Optional[datetime] = None,
) -> StudentParentLink:
    """Link ``student_id`` to the parent owning ``otp`` and consume the code.

    The code is marked used and the student updated in the caller's
    transaction; the caller commits or rolls back both together.
    """

    current = to_naive_utc(now) if now else utc_now()
    try:
        link = _redeem(session, student_id, otp, current)
    except LinkRuleViolation as exc:
        logger.warning("link code redemption refused for student %s: %s", student_id, exc.kind.value)
        raise
    except SQLAlchemyError as exc:
        logger.exception("link code redemption failed for student %s", student_id)
        raise LinkRuleViolation(LinkFailure.UNEXPECTED) from exc

    logger.info("student %s linked to parent %s", student_id, link.parent_id)
    return link
