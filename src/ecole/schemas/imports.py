"""Response schemas of the file import endpoint."""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ImportRowError(BaseModel):
    row: int
    field: str
    title: str
    description: Optional[str] = None


class ImportFileProblem(BaseModel):
    code: str
    title: str
    description: Optional[str] = None
    fatal: bool


class ImportBanner(BaseModel):
    success: bool
    title: str
    description: Optional[str] = None


class ImportReport(BaseModel):
    """Rows (accepted or as submitted), row errors and the summary banner."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    rows: List[Any]
    errors: List[ImportRowError]
    error_rows: List[int]
    file_error: Optional[ImportFileProblem] = None
    banner: Optional[ImportBanner] = None
