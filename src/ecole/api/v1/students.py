"""Student endpoints."""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...schemas import PerformanceSnapshot, StudentCreate, StudentDetail, StudentFilters, StudentRead, StudentUpdate
from ...services import performance_service, student_service
from ...services.performance_service import PerformanceError
from ...services.student_service import StudentRuleViolation

router = APIRouter(prefix="/students", tags=["students"])

_STUDENT_EXAMPLE = {
    "id": "5d0c1c9e-1f4a-4f1b-8c59-3a2f7f0e6b21",
    "schoolId": "1b9a7e2d-6c3f-4d8e-9a0b-2c4d6e8f0a1b",
    "classId": "7e6d5c4b-3a29-4817-a6b5-c4d3e2f1a0b9",
    "classroomName": "6ème A",
    "parentId": None,
    "idNumber": "A0000001",
    "firstName": "Jean",
    "lastName": "Kouassi",
    "dateOfBirth": "2012-03-14",
    "gender": "M",
    "address": "Cocody, Abidjan",
    "avatarUrl": None,
    "createdAt": "2025-09-01T08:00:00",
    "updatedAt": "2025-09-01T08:00:00",
}


@router.get(
    "",
    response_model=List[StudentRead],
    summary="List students",
    responses={
        200: {
            "description": "Students ordered by last name",
            "content": {"application/json": {"example": [_STUDENT_EXAMPLE]}},
        }
    },
)
def list_students(
    *,
    name: Optional[str] = Query(None, description="Part of the first or last name"),
    id_number: Optional[str] = Query(None, alias="idNumber", description="Part of the ID number"),
    class_id: Optional[UUID] = Query(None, alias="classId", description="Filter by class UUID"),
    school_id: Optional[UUID] = Query(None, alias="schoolId", description="Filter by school UUID"),
    age_min: Optional[int] = Query(None, ge=0, alias="ageMin"),
    age_max: Optional[int] = Query(None, ge=0, alias="ageMax"),
    limit: int = Query(100, ge=1, le=500, description="Maximum items to return"),
    offset: int = Query(0, ge=0, description="Items to skip for pagination"),
    db: Session = Depends(get_db),
) -> List[StudentRead]:
    """Fetch students with optional name, class, school and age filters."""

    filters = StudentFilters(
        name=name,
        id_number=id_number,
        class_id=class_id,
        school_id=school_id,
        age_min=age_min,
        age_max=age_max,
    )
    students = student_service.list_students(db, filters=filters, limit=limit, offset=offset)
    return [StudentRead.model_validate(student) for student in students]


@router.post(
    "",
    response_model=StudentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a student",
    responses={
        201: {
            "description": "Student created",
            "content": {"application/json": {"example": _STUDENT_EXAMPLE}},
        },
        409: {"description": "ID number already used in the school"},
    },
)
def create_student(
    payload: StudentCreate,
    db: Session = Depends(get_db),
) -> StudentRead:
    """Register a student.

    Example request body::

        {
            "idNumber": "A0000001",
            "firstName": "Jean",
            "lastName": "Kouassi",
            "gender": "M",
            "dateOfBirth": "2012-03-14"
        }
    """

    try:
        student = student_service.create_student(db, payload)
        db.commit()
        db.refresh(student)
        return StudentRead.model_validate(student)
    except StudentRuleViolation as exc:
        db.rollback()
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.get(
    "/{student_id}",
    response_model=StudentDetail,
    summary="Get a student",
    responses={404: {"description": "Student not found"}},
)
def get_student(student_id: UUID, db: Session = Depends(get_db)) -> StudentDetail:
    try:
        student = student_service.get_student(db, student_id)
    except StudentRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
    return StudentDetail.model_validate(student)


@router.patch(
    "/{student_id}",
    response_model=StudentRead,
    summary="Update a student",
    responses={
        200: {
            "description": "Student updated",
            "content": {"application/json": {"example": _STUDENT_EXAMPLE}},
        },
        404: {"description": "Student not found"},
    },
)
def update_student(
    student_id: UUID,
    payload: StudentUpdate,
    db: Session = Depends(get_db),
) -> StudentRead:
    """Apply the provided fields; unchanged values are not written."""

    try:
        student = student_service.update_student(db, student_id, payload)
        db.commit()
        db.refresh(student)
        return StudentRead.model_validate(student)
    except StudentRuleViolation as exc:
        db.rollback()
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.get(
    "/{student_id}/performance",
    response_model=PerformanceSnapshot,
    summary="Student performance snapshot",
    responses={
        200: {
            "description": "Attendance counts, averages and overall label",
            "content": {
                "application/json": {
                    "example": {
                        "attendance": {"present": 18, "absent": 1, "late": 1},
                        "attendancePercentage": "90.0",
                        "participationAverage": 14.5,
                        "controlNoteAverage": 13.25,
                        "overallPerformance": "Bien",
                        "performanceColor": "yellow",
                    }
                }
            },
        },
        404: {"description": "Student not found"},
    },
)
def get_student_performance(student_id: UUID, db: Session = Depends(get_db)) -> PerformanceSnapshot:
    try:
        return performance_service.student_performance(db, student_id)
    except PerformanceError as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
