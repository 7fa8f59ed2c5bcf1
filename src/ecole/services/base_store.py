"""Shared plumbing of the session-backed state containers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurrentUser:
    """The signed-in director or teacher."""

    user_id: Optional[UUID]
    school_id: Optional[UUID]


class SessionStore:
    """Loading flag, last error and one-session-per-action execution.

    Subclasses list the domain exceptions whose ``detail`` is shown to the
    user in ``rule_errors``; any other storage failure is reported with the
    action's generic message.
    """

    rule_errors: tuple[type[Exception], ...] = ()

    def __init__(self, session_factory: sessionmaker, current_user: Callable[[], CurrentUser]) -> None:
        self._session_factory = session_factory
        self._current_user = current_user
        self.is_loading = False
        self.error: Optional[str] = None

    def clear_error(self) -> None:
        self.error = None

    def _run(self, action: Callable[[Session], Any], failure: str) -> Any:
        self.is_loading = True
        self.error = None
        session = self._session_factory()
        try:
            result = action(session)
            session.commit()
            return result
        except self.rule_errors as exc:
            session.rollback()
            self.error = exc.detail
            return None
        except SQLAlchemyError:
            session.rollback()
            logger.exception("%s", failure)
            self.error = failure
            return None
        finally:
            session.close()
            self.is_loading = False
