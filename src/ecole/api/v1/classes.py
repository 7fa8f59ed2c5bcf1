"""Class endpoints."""

from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from ...core.database import get_db
from ...schemas import ClassCreate, ClassFilters, ClassRead, ClassUpdate, GradeGroup
from ...services import class_service
from ...services.class_service import ClassRuleViolation

router = APIRouter(prefix="/classes", tags=["classes"])

_CLASS_EXAMPLE = {
    "id": "7e6d5c4b-3a29-4817-a6b5-c4d3e2f1a0b9",
    "name": "6ème A",
    "description": None,
    "gradeId": 1,
    "schoolId": "1b9a7e2d-6c3f-4d8e-9a0b-2c4d6e8f0a1b",
    "mainTeacherId": "3c2b1a09-8f7e-4d6c-b5a4-93827160f5e4",
    "mainTeacherName": "Koffi Yao",
    "studentCount": 42,
}


@router.get(
    "",
    response_model=List[ClassRead],
    summary="List classes",
    responses={
        200: {
            "description": "Classes ordered by grade, then name",
            "content": {"application/json": {"example": [_CLASS_EXAMPLE]}},
        }
    },
)
def list_classes(
    *,
    name: Optional[str] = Query(None, description="Part of the class name"),
    grade_id: Optional[int] = Query(None, alias="gradeId", description="Filter by grade"),
    school_id: Optional[UUID] = Query(None, alias="schoolId", description="Filter by school UUID"),
    db: Session = Depends(get_db),
) -> List[ClassRead]:
    filters = ClassFilters(name=name, grade_id=grade_id, school_id=school_id)
    rows = class_service.list_classes(db, filters=filters)
    return [ClassRead.from_row(classroom, count) for classroom, count in rows]


@router.get(
    "/grouped-by-grade",
    response_model=List[GradeGroup],
    summary="Classes grouped by grade",
    responses={
        200: {
            "description": "One entry per grade with its classes",
            "content": {
                "application/json": {
                    "example": [
                        {
                            "id": "0",
                            "name": "6ème",
                            "count": 84,
                            "subclasses": [
                                {"id": "7e6d5c4b-3a29-4817-a6b5-c4d3e2f1a0b9", "name": "6ème A"},
                                {"id": "0a1b2c3d-4e5f-4a6b-8c7d-9e0f1a2b3c4d", "name": "6ème B"},
                            ],
                        }
                    ]
                }
            },
        }
    },
)
def classes_grouped_by_grade(
    school_id: UUID = Query(..., alias="schoolId", description="School UUID"),
    db: Session = Depends(get_db),
) -> List[GradeGroup]:
    """Return the school's classes under their grade level."""

    return class_service.classes_grouped_by_grade(db, school_id)


@router.post(
    "",
    response_model=ClassRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a class",
    responses={
        201: {
            "description": "Class created",
            "content": {"application/json": {"example": {**_CLASS_EXAMPLE, "studentCount": 0}}},
        },
        404: {"description": "Main teacher not found"},
        409: {"description": "Class name already used in the school"},
    },
)
def create_class(payload: ClassCreate, db: Session = Depends(get_db)) -> ClassRead:
    """Create a class.

    Example request body::

        {
            "name": "6ème A",
            "gradeId": 1,
            "mainTeacherId": "3c2b1a09-8f7e-4d6c-b5a4-93827160f5e4"
        }
    """

    try:
        classroom, count = class_service.create_class(db, payload)
        db.commit()
        db.refresh(classroom)
        return ClassRead.from_row(classroom, count)
    except ClassRuleViolation as exc:
        db.rollback()
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc


@router.get(
    "/{class_id}",
    response_model=ClassRead,
    summary="Get a class",
    responses={404: {"description": "Class not found"}},
)
def get_class(class_id: UUID, db: Session = Depends(get_db)) -> ClassRead:
    try:
        classroom, count = class_service.get_class(db, class_id)
    except ClassRuleViolation as exc:
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
    return ClassRead.from_row(classroom, count)


@router.patch(
    "/{class_id}",
    response_model=ClassRead,
    summary="Update a class",
    responses={
        200: {
            "description": "Class updated",
            "content": {"application/json": {"example": _CLASS_EXAMPLE}},
        },
        404: {"description": "Class or main teacher not found"},
        409: {"description": "Class name already used in the school"},
    },
)
def update_class(class_id: UUID, payload: ClassUpdate, db: Session = Depends(get_db)) -> ClassRead:
    try:
        classroom, count = class_service.update_class(db, class_id, payload)
        db.commit()
        return ClassRead.from_row(classroom, count)
    except ClassRuleViolation as exc:
        db.rollback()
        raise HTTPException(status_code=exc.status_code, detail=exc.detail) from exc
