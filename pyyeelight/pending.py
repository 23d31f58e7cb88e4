"""Table of requests waiting for their response.

Each outstanding request owns a single-use asyncio future. The request
path registers and awaits it; the receive loop fulfills it. At most one
request is registered per id: registering again cancels the previous
waiter.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import Any, Callable

from .exceptions import YeelightProtocolError
from .messages import CommandError, CommandResult

_LOGGER = logging.getLogger(__name__)

# Converts the raw "result" value of a response into the caller's type
ResultConverter = Callable[[Any], Any]


class PendingRequest:
    """A request awaiting correlation with its response."""

    def __init__(
        self,
        request_id: int,
        result_type: ResultConverter | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        """Initialize the request.

        Args:
            request_id: Id the command was sent with
            result_type: Optional converter applied to the raw result
            loop: Loop owning the future (defaults to the running loop)
        """
        self.request_id = request_id
        self.result_type = result_type
        self.future: asyncio.Future[CommandResult] = (
            loop or asyncio.get_running_loop()
        ).create_future()

    @property
    def done(self) -> bool:
        """Return True once fulfilled or canceled."""
        return self.future.done()

    @property
    def cancelled(self) -> bool:
        """Return True if the request was canceled."""
        return self.future.cancelled()

    def set_result(self, raw: Any) -> None:
        """Fulfill with a successful result.

        Raises:
            YeelightProtocolError: If the converter rejects the result. The
                request is failed with the same error.
        """
        if self.future.done():
            return
        try:
            value = self.result_type(raw) if self.result_type else raw
        except Exception as err:
            error = YeelightProtocolError(
                f"Unexpected result for request {self.request_id}: {raw!r}"
            )
            self.future.set_exception(error)
            raise error from err
        self.future.set_result(CommandResult(id=self.request_id, result=value))

    def set_error(self, error: CommandError) -> None:
        """Fulfill with the error reported by the device."""
        if not self.future.done():
            self.future.set_result(CommandResult(id=self.request_id, error=error))

    def cancel(self) -> None:
        """Cancel the waiter."""
        self.future.cancel()


class PendingRequestTable:
    """Thread-safe mapping of request id to PendingRequest."""

    def __init__(self) -> None:
        """Initialize an empty table."""
        self._lock = threading.Lock()
        self._requests: dict[int, PendingRequest] = {}

    def __len__(self) -> int:
        """Return the number of outstanding requests."""
        with self._lock:
            return len(self._requests)

    def __contains__(self, request_id: object) -> bool:
        """Return True if a request is registered under the id."""
        with self._lock:
            return request_id in self._requests

    def register(
        self, request_id: int, result_type: ResultConverter | None = None
    ) -> PendingRequest:
        """Register a new request, canceling any request holding the id."""
        request = PendingRequest(request_id, result_type)
        with self._lock:
            stale = self._requests.get(request_id)
            if stale is not None:
                _LOGGER.debug("Evicting stale request %d", request_id)
                stale.cancel()
            self._requests[request_id] = request
        return request

    def fulfill_success(self, request_id: int, raw: Any) -> bool:
        """Fulfill the request registered under the id, if any.

        Returns:
            True if a request was found
        """
        request = self._pop(request_id)
        if request is None:
            return False
        request.set_result(raw)
        return True

    def fulfill_error(self, request_id: int, error: CommandError) -> bool:
        """Fail the request registered under the id, if any.

        Returns:
            True if a request was found
        """
        request = self._pop(request_id)
        if request is None:
            return False
        request.set_error(error)
        return True

    def release(self, request_id: int, request: PendingRequest) -> None:
        """Remove the entry only if it still holds this request."""
        with self._lock:
            if self._requests.get(request_id) is request:
                del self._requests[request_id]

    def cancel_all(self) -> int:
        """Cancel every outstanding request.

        Returns:
            Number of requests canceled
        """
        with self._lock:
            requests = list(self._requests.values())
            self._requests.clear()
        for request in requests:
            request.cancel()
        return len(requests)

    def _pop(self, request_id: int) -> PendingRequest | None:
        with self._lock:
            return self._requests.pop(request_id, None)
