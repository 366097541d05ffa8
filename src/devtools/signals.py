"""Route interrupt/termination signals into the asyncio loop."""

from __future__ import annotations

import asyncio
import signal
from contextlib import contextmanager
from typing import Callable, Iterator, List

SHUTDOWN_SIGNALS: List[signal.Signals] = [
    sig for sig in (getattr(signal, name, None) for name in ("SIGINT", "SIGTERM", "SIGHUP")) if sig is not None
]


@contextmanager
def handle_signals(handler: Callable[[int], None]) -> Iterator[List[signal.Signals]]:
    """Call `handler(signum)` on the running loop for each shutdown signal.

    Yields the signals that could actually be installed (none on platforms
    without loop signal support) and restores the previous handlers on exit.
    """
    loop = asyncio.get_running_loop()
    installed: List[signal.Signals] = []
    for sig in SHUTDOWN_SIGNALS:
        try:
            loop.add_signal_handler(sig, handler, sig)
        except (NotImplementedError, RuntimeError, ValueError):
            continue
        installed.append(sig)
    try:
        yield installed
    finally:
        for sig in installed:
            loop.remove_signal_handler(sig)
