"""
Error translation for the HTTP layer.

Services raise typed LedgerErrors; routes turn them into
HTTPExceptions with a status picked by error category.
"""

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ledger_engine.errors import LedgerError

STATUS_BY_CATEGORY = {
    "ValidationError": 400,
    "NotFoundError": 404,
    "ConflictError": 409,
    "InfrastructureError": 500,
}


def http_error(db: Session, error: LedgerError) -> HTTPException:
    """Roll back the request's session and build the matching HTTPException."""
    db.rollback()
    status_code = STATUS_BY_CATEGORY.get(error.category, 500)
    return HTTPException(status_code=status_code, detail=error.to_dict())
