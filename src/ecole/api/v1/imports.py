"""Endpoint validating an uploaded student import file."""

from __future__ import annotations

from fastapi import APIRouter, File, UploadFile

from ...imports import DataImport
from ...schemas import ImportBanner, ImportFileProblem, ImportReport, ImportRowError, StudentImportRow

router = APIRouter(prefix="/students", tags=["imports"])


@router.post(
    "/imports",
    response_model=ImportReport,
    summary="Validate a student import file",
    responses={
        200: {
            "description": "Parsed rows with per-row errors",
            "content": {
                "application/json": {
                    "example": {
                        "rows": [
                            {"idNumber": "A0000001", "firstName": "Jean", "lastName": "Kouassi", "gender": "M"}
                        ],
                        "errors": [],
                        "errorRows": [],
                        "fileError": None,
                        "banner": {
                            "success": True,
                            "title": "Validation réussie",
                            "description": "Super, vos données sont correctes et prêtes à être sauvegardées.",
                        },
                    }
                }
            },
        }
    },
)
async def validate_import(file: UploadFile = File(..., description="CSV, Excel or JSON file")) -> ImportReport:
    """Parse and validate a file without persisting anything.

    Rows failing validation are returned as submitted so they can be
    corrected inline; ``errors`` reference them by 1-based row number.
    """

    content = await file.read()
    pipeline = DataImport(StudentImportRow)
    rows, file_error = pipeline.parse_file(content, file.filename or "")
    banner = pipeline.validation_message
    return ImportReport(
        rows=rows,
        errors=[ImportRowError(**vars(error)) for error in pipeline.errors],
        error_rows=sorted(pipeline.error_rows),
        file_error=ImportFileProblem(**file_error.as_dict()) if file_error else None,
        banner=ImportBanner(**vars(banner)) if banner else None,
    )
