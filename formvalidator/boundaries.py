"""Validation at the HTTP Boundary

Form submissions enter the system here. A Starlette/FastAPI form body is
turned into the engine's field -> values mapping (repeated keys keep their
order, uploaded files are ignored) and validated in one pass.

Usage:
    signup = FormValidator({...})

    @router.post("/signup")
    async def create(report: ValidationReport = Depends(form_validation(signup))):
        if not report.is_valid:
            return JSONResponse(status_code=400, content=report.to_dict())
        ...
"""
from __future__ import annotations

from typing import Awaitable, Callable

from starlette.datastructures import UploadFile
from starlette.requests import Request

from formvalidator.core.logging import bind_context, http_logger, unbind_context
from formvalidator.validator import FormValidator, ValidationReport

log = http_logger()


async def read_form(request: Request) -> dict[str, list[str]]:
    """Collect every submitted value of an url-encoded or multipart body."""
    form: dict[str, list[str]] = {}
    async with request.form() as data:
        for name, value in data.multi_items():
            if isinstance(value, UploadFile):
                continue
            form.setdefault(name, []).append(value)
    return form


def form_validation(validator: FormValidator, *, in_place: bool = True) -> Callable[[Request], Awaitable[ValidationReport]]:
    """FastAPI dependency factory: validates the request form, returns the report."""

    async def dependency(request: Request) -> ValidationReport:
        form = await read_form(request)
        # form_path tags every event of the pass (form_validated, form_rejected)
        bind_context(form_path=request.url.path)
        try:
            report = validator.validate(form, in_place=in_place)
            if not report.is_valid:
                log.info("form_rejected", failed_fields=report.failed_fields)
        finally:
            unbind_context("form_path")
        return report

    return dependency
