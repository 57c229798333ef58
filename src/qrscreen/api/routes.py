"""API route handlers.

Endpoints are plain ``def`` so FastAPI runs the blocking serial I/O in its
threadpool.
"""

from collections.abc import Callable
from typing import TypeVar

from fastapi import APIRouter, Depends, HTTPException

from qrscreen.api.dependencies import app_state, get_session
from qrscreen.core.exceptions import TransportIOError
from qrscreen.core.models import (
    ClearRequest,
    CommandResponse,
    ErrorResponse,
    QrRequest,
    TextRequest,
    TimeoutsRequest,
    TimeoutsResponse,
    ValueResponse,
)
from qrscreen.protocol.constants import Command
from qrscreen.protocol.session import ScreenSession

T = TypeVar("T")

router = APIRouter(prefix="/api")

_ERRORS = {503: {"model": ErrorResponse}}


def _transact(operation: Callable[..., T], *args) -> T:
    """Run one session operation under the app lock, mapping transport errors to 503."""
    with app_state.lock:
        try:
            return operation(*args)
        except TransportIOError as e:
            raise HTTPException(status_code=503, detail=str(e)) from None


def _value(command: Command, value: str | None) -> ValueResponse:
    if value is None:
        raise HTTPException(status_code=504, detail=f"No response to {command.name}")
    return ValueResponse(command=command.tag, value=value)


@router.get("/version", response_model=ValueResponse, responses={**_ERRORS, 504: {"model": ErrorResponse}})
def get_version(session: ScreenSession = Depends(get_session)):
    """Get the screen firmware version."""
    return _value(Command.GET_VERSION, _transact(session.get_version))


@router.get("/id", response_model=ValueResponse, responses={**_ERRORS, 504: {"model": ErrorResponse}})
def get_id(session: ScreenSession = Depends(get_session)):
    """Get the screen hardware id."""
    return _value(Command.GET_ID, _transact(session.get_id))


@router.post("/id/show", response_model=CommandResponse, responses=_ERRORS)
def show_id(session: ScreenSession = Depends(get_session)):
    """Show the hardware id as a QR code."""
    return CommandResponse(command=Command.SHOW_ID.tag, success=_transact(session.show_id))


@router.post("/qr", response_model=CommandResponse, responses=_ERRORS)
def show_qr(request: QrRequest, session: ScreenSession = Depends(get_session)):
    """Show a QR code, optionally with the logo."""
    if request.logo:
        command, operation = Command.SHOW_QR_WITH_LOGO, session.show_qr_with_logo
    else:
        command, operation = Command.SHOW_QR, session.show_qr
    return CommandResponse(command=command.tag, success=_transact(operation, request.text))


@router.post("/header", response_model=CommandResponse, responses=_ERRORS)
def show_header(request: TextRequest, session: ScreenSession = Depends(get_session)):
    return CommandResponse(command=Command.SHOW_HEADER.tag, success=_transact(session.show_header, request.text))


@router.post("/footer", response_model=CommandResponse, responses=_ERRORS)
def show_footer(request: TextRequest, session: ScreenSession = Depends(get_session)):
    return CommandResponse(command=Command.SHOW_FOOTER.tag, success=_transact(session.show_footer, request.text))


@router.post("/clear", response_model=CommandResponse, responses=_ERRORS)
def clear(request: ClearRequest | None = None, session: ScreenSession = Depends(get_session)):
    """Clear the QR code section (with the logo unless ``logo`` is false)."""
    if request is None or request.logo:
        command, operation = Command.CLEAR, session.clear
    else:
        command, operation = Command.CLEAR_WITHOUT_LOGO, session.clear_without_logo
    return CommandResponse(command=command.tag, success=_transact(operation))


@router.post("/off", response_model=CommandResponse, responses=_ERRORS)
def switch_off(session: ScreenSession = Depends(get_session)):
    """Switch the screen off."""
    return CommandResponse(command=Command.SWITCH_OFF.tag, success=_transact(session.switch_off))


@router.get("/timeouts", response_model=TimeoutsResponse, responses=_ERRORS)
def get_timeouts(session: ScreenSession = Depends(get_session)):
    return TimeoutsResponse(read_ms=session.read_timeout, write_ms=session.write_timeout)


@router.put("/timeouts", response_model=TimeoutsResponse, responses=_ERRORS)
def set_timeouts(request: TimeoutsRequest, session: ScreenSession = Depends(get_session)):
    """Update read and/or write timeouts for subsequent commands."""
    with app_state.lock:
        if request.read_ms is not None:
            session.set_read_timeout(request.read_ms)
        if request.write_ms is not None:
            session.set_write_timeout(request.write_ms)
        return TimeoutsResponse(read_ms=session.read_timeout, write_ms=session.write_timeout)
