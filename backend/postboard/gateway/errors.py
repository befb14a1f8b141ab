"""
Postboard Backend — Gateway Error Kinds
=========================================

What:  Typed failures raised by the persistence gateway.
How:   `translate_errors()` wraps every statement the gateway issues and
       turns SQLAlchemy/DBAPI exceptions into one of the kinds below.
       Integers too large for the driver (OverflowError) become
       GatewayValidationError. Connection-level failures (OperationalError,
       InterfaceError) are not translated; they reach the error mapper
       unclassified.

Error Hierarchy:
    GatewayError (base)
    ├── KnownGatewayError          → 400 "Error en la base de datos"
    │   ├── UniqueViolationError   → 409 "El registro ya existe"
    │   ├── RecordNotFoundError    → 404 "Registro no encontrado"
    │   └── ForeignKeyViolationError → 400 "Error de referencia externa"
    └── GatewayValidationError     → 400 "Error de validación en la base de datos"

Detection:
    PostgreSQL drivers expose a SQLSTATE (`sqlstate` / `pgcode`) on the
    DBAPI exception; SQLite only gives a message. Both are checked.
"""

import re
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from sqlalchemy.exc import (
    DataError,
    DBAPIError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    StatementError,
)

UNIQUE_VIOLATION_SQLSTATE = "23505"
FOREIGN_KEY_VIOLATION_SQLSTATE = "23503"

_SQLITE_UNIQUE_RE = re.compile(r"UNIQUE constraint failed: (?P<columns>.+)$")


class GatewayError(Exception):
    """
    Base class for persistence failures.

    Attributes:
        code:    Machine-readable kind, returned to the client as `error.code`
        meta:    Optional structured detail (e.g. the violated columns)
        message: Driver-level description (logged; only validation errors
                 echo it to the client)
    """

    code = "database_error"

    def __init__(
        self,
        message: str = "",
        code: Optional[str] = None,
        meta: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        if code:
            self.code = code
        self.meta = meta
        super().__init__(message or self.code)


class KnownGatewayError(GatewayError):
    """A database rejected the request for a reason the client can act on."""


class UniqueViolationError(KnownGatewayError):
    code = "unique_violation"


class RecordNotFoundError(KnownGatewayError):
    """The row an update, delete or tag connect targets does not exist."""

    code = "record_not_found"


class ForeignKeyViolationError(KnownGatewayError):
    code = "foreign_key_violation"


class GatewayValidationError(GatewayError):
    """A value could not be bound or stored (wrong type, out of range, too long)."""

    code = "validation_error"


def _sqlstate(exc: DBAPIError) -> Optional[str]:
    orig = exc.orig
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def _unique_target(text: str) -> Optional[List[str]]:
    match = _SQLITE_UNIQUE_RE.search(text)
    if not match:
        return None
    return [column.strip().split(".")[-1] for column in match.group("columns").split(",")]


def classify_integrity_error(exc: IntegrityError) -> KnownGatewayError:
    """Map an IntegrityError onto unique / foreign-key / generic kinds."""
    state = _sqlstate(exc)
    text = str(exc.orig)

    if state == UNIQUE_VIOLATION_SQLSTATE or "UNIQUE constraint failed" in text:
        target = _unique_target(text)
        return UniqueViolationError(text, meta={"target": target} if target else None)
    if state == FOREIGN_KEY_VIOLATION_SQLSTATE or "FOREIGN KEY constraint failed" in text:
        return ForeignKeyViolationError(text)
    return KnownGatewayError(text, code=state or "integrity_error")


@contextmanager
def translate_errors() -> Iterator[None]:
    """
    Translate SQLAlchemy exceptions raised inside the block into gateway errors.

    Usage:
        with translate_errors():
            await session.flush()
    """
    try:
        yield
    except IntegrityError as exc:
        raise classify_integrity_error(exc) from exc
    except DataError as exc:
        raise GatewayValidationError(str(exc.orig)) from exc
    except (OperationalError, InterfaceError):
        raise
    except DBAPIError as exc:
        raise KnownGatewayError(str(exc.orig), code=_sqlstate(exc)) from exc
    except StatementError as exc:
        # Raised before reaching the driver, e.g. a value the column type cannot bind
        raise GatewayValidationError(str(exc.orig or exc)) from exc
    except OverflowError as exc:
        # sqlite3 refuses Python ints outside the signed 64-bit range at bind time
        raise GatewayValidationError(str(exc)) from exc
