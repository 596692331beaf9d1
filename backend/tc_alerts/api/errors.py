# backend/tc_alerts/api/errors.py
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.datastructures import MutableHeaders
from starlette.responses import Response
from http import HTTPStatus
from typing import Callable, Optional
import logging

from tc_alerts.schemas.alert import Alerts, create_error_alerts

# Request state key under which the legacy helper leaves the intended status.
STATUS_KEY = "status"

CONTENT_TYPE = "Content-Type"
APPLICATION_JSON = "application/json"


def _status_text(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return ""


def _remote_addr(request: Request) -> str:
    client = request.client
    if client is None:
        return ""
    return f"{client.host}:{client.port}"


# Same escaping as Go encoding/json, so legacy clients see identical bytes.
_JSON_ESCAPES = (
    ("<", "\\u003c"),
    (">", "\\u003e"),
    ("&", "\\u0026"),
    ("\u2028", "\\u2028"),
    ("\u2029", "\\u2029"),
)


def _marshal(alerts: Alerts) -> bytes:
    text = alerts.model_dump_json()
    for raw, escaped in _JSON_ESCAPES:
        text = text.replace(raw, escaped)
    return text.encode("utf-8")


class ResponseWriter:
    """
    Accumulates headers, an optional status and body bytes for a response
    that is handed back to Starlette once the handler is done.
    """

    def __init__(self) -> None:
        self.headers = MutableHeaders()
        self.status_code: Optional[int] = None
        self._body = bytearray()

    def write_header(self, status_code: int) -> None:
        # only the first explicit status counts
        if self.status_code is None:
            self.status_code = int(status_code)

    def write(self, data: bytes) -> int:
        self._body.extend(data)
        return len(data)

    @property
    def body(self) -> bytes:
        return bytes(self._body)

    def to_response(self) -> Response:
        return Response(
            content=self.body,
            status_code=int(self.status_code or 200),
            headers=self.headers,
        )


def get_handle_errors_func(
    w: ResponseWriter, request: Request
) -> Callable[..., None]:
    """
    Build an error handler bound to one request/response pair. The handler
    takes a status code and any number of errors (None entries are skipped)
    and writes them as error alerts.

    The status is not written to w. It is stored on the request state under
    STATUS_KEY and applied to the outgoing response by the middleware that
    install() registers.

    Deprecated: return error_response(...) from the route instead.
    """
    def handle(status: int, *errs: Optional[BaseException]) -> None:
        logging.error("%s %s", _remote_addr(request), list(errs))
        try:
            body = _marshal(create_error_alerts(*errs))
        except (TypeError, ValueError) as e:
            logging.error("failed to marshal error: %s", e)
            w.write_header(HTTPStatus.INTERNAL_SERVER_ERROR)
            w.write(_status_text(HTTPStatus.INTERNAL_SERVER_ERROR).encode("utf-8"))
            return
        w.headers[CONTENT_TYPE] = APPLICATION_JSON
        setattr(request.state, STATUS_KEY, status)
        w.write(body)

    return handle


def get_status(request: Request) -> Optional[int]:
    """Status stashed on the request by the legacy error handler, if any."""
    return getattr(request.state, STATUS_KEY, None)


def alerts_response(alerts: Alerts, status_code: int = 200) -> Response:
    return Response(
        content=_marshal(alerts),
        status_code=int(status_code),
        media_type=APPLICATION_JSON,
    )


def error_response(
    request: Request,
    status_code: int,
    user_err: Optional[object] = None,
    sys_err: Optional[object] = None,
) -> Response:
    """
    Error alerts with an explicit status.

    sys_err is only logged, never shown to the client. Without a user_err
    the client gets the reason phrase of status_code.
    """
    if sys_err is not None:
        logging.error("%s %s", _remote_addr(request), sys_err)
    if user_err is None:
        user_err = _status_text(status_code)
    return alerts_response(create_error_alerts(user_err), status_code)


def _clear_status(request: Request) -> None:
    if get_status(request) is not None:
        delattr(request.state, STATUS_KEY)


# ---- Pipeline wiring ----
async def _apply_stashed_status(request: Request, call_next):
    response = await call_next(request)
    status = get_status(request)
    if status is not None:
        response.status_code = status
    return response


async def _http_exception_handler(request: Request, exc: StarletteHTTPException):
    _clear_status(request)
    user_err = str(exc.detail) if exc.detail else None
    response = error_response(request, exc.status_code, user_err=user_err)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def _validation_exception_handler(request: Request, exc: RequestValidationError):
    _clear_status(request)
    errs = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p != "body"]
        msg = err.get("msg", "invalid value")
        errs.append(f"{'.'.join(loc)}: {msg}" if loc else msg)
    return alerts_response(create_error_alerts(*errs), HTTPStatus.BAD_REQUEST)


async def _unhandled_exception_handler(request: Request, exc: Exception):
    _clear_status(request)
    return error_response(request, HTTPStatus.INTERNAL_SERVER_ERROR, sys_err=exc)


def install(app: FastAPI) -> None:
    """Register the status middleware and the alert-rendering exception handlers."""
    app.middleware("http")(_apply_stashed_status)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
