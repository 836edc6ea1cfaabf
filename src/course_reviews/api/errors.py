"""HTTP mapping for Course Reviews domain errors.

Protean's own exceptions (ValidationError → 400, ObjectNotFoundError → 404)
are mapped by ``protean.integrations.fastapi.register_exception_handlers``.
This module adds the errors defined by this domain.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from course_reviews.review.exceptions import (
    EditWindowExpiredError,
    EligibilityError,
    ForbiddenError,
)


async def _forbidden(request: Request, exc: ForbiddenError) -> JSONResponse:
    return JSONResponse(status_code=403, content={"error": str(exc)})


async def _not_eligible(request: Request, exc: EligibilityError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": exc.reason, "completion_percentage": exc.completion_percentage},
    )


async def _edit_window_expired(request: Request, exc: EditWindowExpiredError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": str(exc)})


def register_review_exception_handlers(app: FastAPI) -> None:
    """Install Protean's handlers plus the Course Reviews ones on ``app``."""
    register_exception_handlers(app)
    app.add_exception_handler(ForbiddenError, _forbidden)
    app.add_exception_handler(EligibilityError, _not_eligible)
    app.add_exception_handler(EditWindowExpiredError, _edit_window_expired)
