"""
Translate service results into HTTP responses.

Routes call :func:`unwrap` on every service result: a successful
result yields its value, an error becomes an ``HTTPException`` whose
status is chosen by the error's kind and whose detail is the error's
message.  ``Unavailable`` messages never carry store detail; the cause
has already been logged by the repository.
"""

from typing import TypeVar

from fastapi import HTTPException, status

from creature_catalog.app.core.errors import ErrorKind, Result

T = TypeVar("T")

STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.DUPLICATE_KEY: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNAVAILABLE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def unwrap(result: Result[T]) -> T:
    if result.ok:
        return result.value
    raise HTTPException(status_code=STATUS_BY_KIND[result.error.kind], detail=result.error.message)
