"""Endpoint linking a student to a parent with a one-time code."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...schemas import LinkResult, LinkStudentParentRequest
from ...services import link_service
from ...services.link_service import LINK_SUCCESS_MESSAGE, LinkRuleViolation

router = APIRouter(prefix="/students", tags=["students"])


@router.patch(
    "/link-student-and-parent",
    response_model=LinkResult,
    summary="Link a student to a parent",
    responses={
        200: {
            "description": "Student linked",
            "content": {
                "application/json": {
                    "example": {"success": True, "message": "Élève lié au parent avec succès"}
                }
            },
        },
        400: {"description": "Code already used or expired"},
        404: {"description": "Unknown code or student"},
        422: {"description": "Malformed student id or code"},
    },
)
def link_student_and_parent(
    payload: LinkStudentParentRequest,
    db: Session = Depends(get_db),
) -> LinkResult:
    """Redeem a parent's code for a student.

    Example request body::

        {
            "studentId": "0b6f7c52-3c1e-4c52-9d7e-3b8a1f0d2c11",
            "otp": "482913"
        }
    """

    try:
        link_service.redeem_link_code(db, student_id=payload.student_id, otp=payload.otp)
        db.commit()
        return LinkResult(success=True, message=LINK_SUCCESS_MESSAGE)
    except LinkRuleViolation as exc:
        db.rollback()
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
