"""Service layer exports."""

from . import (
	class_service,
	class_store,
	link_service,
	performance_service,
	student_service,
	student_store,
)

__all__ = [
	"class_service",
	"class_store",
	"link_service",
	"performance_service",
	"student_service",
	"student_store",
]
