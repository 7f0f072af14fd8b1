# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Transaction boundary used by every repository call."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from devicetracker.shared.errors import StoreUnavailableError
from devicetracker.shared.logging import logger


class SqlAlchemyUnitOfWork:
    """Open a session on enter; commit on clean exit, roll back otherwise."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._factory = session_factory
        self._session: Session | None = None

    @property
    def session(self) -> Session:
        if self._session is None:
            raise RuntimeError("unit of work used outside its context")
        return self._session

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        self._session = self._factory()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        session, self._session = self.session, None
        try:
            if exc is None:
                session.commit()
            else:
                logger.debug(f"uow: rollback ({exc_type.__name__})")
                session.rollback()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()


@contextmanager
def unit_of_work_scope(
    factory: Callable[[], Session], operation: str | None = None
) -> Iterator[Session]:
    """Yield a transactional session.

    Store failures surface as ``StoreUnavailableError``; integrity violations
    are left to the caller, which knows what constraint it is guarding.
    """

    try:
        with SqlAlchemyUnitOfWork(factory) as uow:
            yield uow.session
    except IntegrityError:
        raise
    except SQLAlchemyError as exc:
        logger.error(f"store: {operation or 'operation'} failed ({type(exc).__name__})")
        raise StoreUnavailableError(operation) from exc
