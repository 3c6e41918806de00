"""Logfire setup and instrumentation.

Services open one span per operation, named ``<service>.<operation>``:

    with logfire.span("invite_service.create_invite", inviter_id=str(inviter_id)):
        ...

Span attributes carry ids only. Token secrets, token hashes and passwords
never appear in spans or log records.
"""

from typing import Any

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from singles.config import Settings

_SERVICE_VERSION = "0.1.0"


def _should_send(settings: Settings) -> bool:
    explicit = settings.observability.send_to_logfire
    if explicit is not None:
        return explicit
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure the logfire SDK from settings.

    Telemetry leaves the process only when ``OBSERVABILITY__SEND_TO_LOGFIRE``
    is true, or when it is unset and ``OBSERVABILITY__LOGFIRE_TOKEN`` is
    present. ``OBSERVABILITY__CONSOLE=false`` silences console output.
    """
    observability = settings.observability
    send = _should_send(settings)

    console: logfire.ConsoleOptions | bool = False
    if observability.console:
        console = logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        )

    logfire.configure(
        service_name=observability.service_name,
        service_version=_SERVICE_VERSION,
        environment=settings.environment,
        send_to_logfire=send,
        token=observability.logfire_token,
        console=console,
    )
    logfire.info(
        "Observability configured",
        service_name=observability.service_name,
        environment=settings.environment,
        send_to_logfire=send,
    )


def _request_attributes(request: Any, attributes: dict[str, Any]) -> dict[str, Any]:
    # Path only: invite and activation links carry their token in the query string
    mapped = {**attributes, "path": request.url.path}
    if getattr(request, "method", None):
        mapped["method"] = request.method
    if request.client:
        mapped["client_host"] = request.client.host
    return mapped


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every HTTP request without capturing headers or query strings."""
    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace queries on an engine.

    Passed to ``SqlStore`` as its engine hook, so engines recreated after a
    transient failure are instrumented too.
    """
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)


def instrument_httpx() -> None:
    """Trace outbound notification delivery."""
    logfire.instrument_httpx()
