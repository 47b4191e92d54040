"""HTTP middleware: request id, client ip, access log, recovery, deadline, disconnect."""

from __future__ import annotations

import asyncio
import time
import uuid

import structlog
from fastapi import Request
from fastapi.responses import PlainTextResponse, Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-Id"


def _client_ip(request: Request) -> str | None:
    """Prefer proxy headers over the socket peer address."""
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else None


async def request_context(request: Request, call_next) -> Response:
    """Tag the request with an id, log it, and turn crashes into plain 500s."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        request_id=request_id,
        remote_ip=_client_ip(request),
    )

    started = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        logger.exception("request_panic", method=request.method, path=request.url.path)
        response = PlainTextResponse("Internal Server Error", status_code=500)

    response.headers[REQUEST_ID_HEADER] = request_id
    logger.info(
        "request_completed",
        method=request.method,
        path=request.url.path,
        status=response.status_code,
        duration_ms=round((time.perf_counter() - started) * 1000, 2),
    )
    structlog.contextvars.clear_contextvars()
    return response


class RequestLifetimeMiddleware:
    """Bound each request by ``timeout`` seconds and by the client connection.

    The handler runs in its own task next to a watcher on ``receive()``.
    Whichever comes first, the deadline or an ``http.disconnect`` before the
    response is finished, cancels the handler and with it any upstream call
    in flight.
    """

    def __init__(self, app: ASGIApp, timeout: float):
        self.app = app
        self.timeout = timeout

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False
        response_finished = False
        inbox: asyncio.Queue[Message] = asyncio.Queue()

        async def send_wrapper(message: Message) -> None:
            nonlocal response_started, response_finished
            if message["type"] == "http.response.start":
                response_started = True
            elif message["type"] == "http.response.body" and not message.get("more_body", False):
                response_finished = True
            await send(message)

        async def receive_wrapper() -> Message:
            if watcher.done() and inbox.empty():
                return {"type": "http.disconnect"}
            return await inbox.get()

        async def watch_disconnect() -> None:
            while True:
                message = await receive()
                await inbox.put(message)
                if message["type"] == "http.disconnect":
                    return

        handler = asyncio.ensure_future(self.app(scope, receive_wrapper, send_wrapper))
        watcher = asyncio.ensure_future(watch_disconnect())
        try:
            done, _ = await asyncio.wait(
                {handler, watcher}, timeout=self.timeout, return_when=asyncio.FIRST_COMPLETED
            )

            if handler in done or (watcher in done and response_finished):
                await handler
                return

            await _cancel(handler)
            if watcher in done:
                watcher.result()
                logger.info("request_cancelled", path=scope.get("path"))
                if not response_started:
                    await PlainTextResponse("Client Closed Request", status_code=499)(scope, receive, send)
                return

            logger.warning("request_timeout", path=scope.get("path"), timeout=self.timeout)
            if not response_started:
                await PlainTextResponse("Gateway Timeout", status_code=504)(scope, receive, send)
        finally:
            await _cancel(watcher)
            await _cancel(handler)


async def _cancel(task: asyncio.Future) -> None:
    if task.done():
        return
    task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        pass
