import logging

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

INTERNAL_ERROR_DETAIL = 'Internal server error.'


def database_error(db: Session | None) -> HTTPException:
    """Roll back the session and build the 500 raised for a failed store call.

    Must be called from inside the ``except`` block so the traceback is logged.
    """
    if db is not None:
        db.rollback()
    logger.exception('Database operation failed')
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=INTERNAL_ERROR_DETAIL,
    )


def format_validation_error(error: dict) -> str:
    location = [str(part) for part in error.get('loc', ()) if part not in ('body', 'query', 'path')]
    message = str(error.get('msg', 'Invalid value'))
    if message.startswith('Value error, '):
        message = message[len('Value error, '):]
    if location:
        return f"{'.'.join(location)}: {message}"
    return message


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={'error': exc.detail},
        headers=getattr(exc, 'headers', None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = '; '.join(format_validation_error(error) for error in exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={'error': message or 'Invalid request.'},
    )
