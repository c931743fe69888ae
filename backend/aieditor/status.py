"""Transient status and error messages shown to the user.

A status and an error are never active at the same time. Statuses expire
after a short interval; errors stay until replaced or cleared.
"""

import time
from typing import Callable

import config
from aieditor.models import StatusView

_KEEP = object()


class StatusBoard:
    def __init__(self, ttl: float | None = None, clock: Callable[[], float] = time.monotonic):
        self.ttl = config.STATUS_TTL if ttl is None else ttl
        self._clock = clock
        self._status = ""
        self._status_expires: float | None = None
        self._error = ""

    def set_status(self, message: str, ttl=_KEEP):
        """Post a status; ``ttl=None`` keeps it until replaced"""
        if ttl is _KEEP:
            ttl = self.ttl
        self._error = ""
        self._status = message
        self._status_expires = None if ttl is None else self._clock() + ttl

    def set_error(self, message: str):
        self._status = ""
        self._status_expires = None
        self._error = message

    def clear(self):
        self._status = ""
        self._status_expires = None
        self._error = ""

    @property
    def status(self) -> str:
        if self._status_expires is not None and self._clock() >= self._status_expires:
            self._status = ""
            self._status_expires = None
        return self._status

    @property
    def error(self) -> str:
        return self._error

    def view(self) -> StatusView:
        return StatusView(status=self.status, error=self.error)
