# storerate/core/errors.py
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from postgrest.exceptions import APIError

# PostgREST: `.single()` matched zero (or several) rows.
NO_ROWS_CODE = "PGRST116"

SUBMIT_FIELD = "submit"


class FormError(Exception):
    """
    Form rejected before or by the backend.

    `errors` maps a field name (or "submit" for the whole form) to the
    message the form shows next to it.
    """

    def __init__(
        self,
        errors: dict[str, str],
        status_code: int = 422,
    ):
        super().__init__(errors)
        self.errors = errors
        self.status_code = status_code

    @classmethod
    def submit(cls, exc: Exception, fallback: str) -> "FormError":
        """Backend failure on submit: show its message, or the fallback."""
        return cls(
            {SUBMIT_FIELD: backend_message(exc, fallback)},
            status_code=status.HTTP_400_BAD_REQUEST,
        )


def is_no_rows(exc: Exception) -> bool:
    """True for the PostgREST "no row found" error of `.single()`."""
    return isinstance(exc, APIError) and exc.code == NO_ROWS_CODE


def backend_message(exc: Exception, fallback: str) -> str:
    """
    Message carried by a Supabase error (PostgREST APIError or AuthError).
    """
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    return fallback


def field_errors(exc: RequestValidationError) -> dict[str, str]:
    """
    Flatten pydantic errors to {field: message}, first message per field.

    "Value error, " prefixes are dropped so the text reads like the
    message raised in the validator.
    """
    errors: dict[str, str] = {}
    for err in exc.errors():
        loc = [part for part in err.get("loc", ()) if isinstance(part, str)]
        fields = [part for part in loc if part not in ("body", "query", "path")]
        field = fields[-1] if fields else SUBMIT_FIELD

        ctx_error = (err.get("ctx") or {}).get("error")
        if ctx_error is not None:
            message = str(ctx_error)
        elif err.get("type") == "missing":
            message = "This field is required"
        else:
            message = err.get("msg", "Invalid value")

        errors.setdefault(field, message)
    return errors


async def form_error_handler(request: Request, exc: FormError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"errors": exc.errors})


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"errors": field_errors(exc)},
    )
