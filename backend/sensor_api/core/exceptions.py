"""
Errors raised by the server process.
"""
from __future__ import annotations


class ListenServeError(Exception):
    """The listener could not be bound, or serving stopped with an error.

    Not recoverable: it propagates to the entry point, which reports it on
    stderr and exits with status 1.
    """

    def __init__(self, host: str, port: int, message: str):
        self.host = host
        self.port = port
        self.message = message
        super().__init__(f"listen on {host}:{port}: {message}")
