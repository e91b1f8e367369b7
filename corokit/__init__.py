"""Coroutine events, latches, sync_wait, a task container and a TCP client on asyncio."""

__version__ = "0.1.0"