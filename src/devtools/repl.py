"""Interactive REPL for chrome-devtools-cli."""

from __future__ import annotations

import asyncio
import logging
import signal
from typing import Awaitable, Callable, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory

from src.adapters.tool_invoker import ToolInvoker
from src.core.constants import DEFAULT_PROMPT
from src.devtools.dispatcher import DispatchOutcome, Dispatcher
from src.devtools.signals import handle_signals

LOGGER = logging.getLogger(__name__)

LineReader = Callable[[], Awaitable[str]]


class InteractiveLoop:
    """Read lines, feed the dispatcher and close the session on every exit path.

    Exit triggers are the quit commands, end of input (Ctrl+D), Ctrl+C at the
    prompt and the shutdown signals. All of them end in `shutdown()`, which
    closes the session exactly once.
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        client: Optional[ToolInvoker],
        *,
        prompt: str = DEFAULT_PROMPT,
        read_line: Optional[LineReader] = None,
    ) -> None:
        self.dispatcher = dispatcher
        self.client = client
        self.prompt = prompt
        self._read_line = read_line or self._prompt_reader()
        self._task: Optional[asyncio.Task] = None
        self._signal: Optional[int] = None
        self._shut_down = False

    def _prompt_reader(self) -> LineReader:
        session: Optional[PromptSession] = None

        async def read() -> str:
            nonlocal session
            # Built on first use so a run that never prompts never touches the terminal
            if session is None:
                session = PromptSession(history=InMemoryHistory())
            return await session.prompt_async(self.prompt)

        return read

    async def run(self, startup: Optional[Callable[[], Awaitable[None]]] = None) -> int:
        """Run until an exit trigger, then shut down. Always returns 0.

        `startup` (typically connecting the session) runs under the same
        signal handling as the loop, so a signal during a slow server launch
        still ends in `shutdown()`.
        """
        self._task = asyncio.current_task()
        with handle_signals(self.request_shutdown):
            try:
                if startup is not None:
                    await startup()
                while True:
                    try:
                        line = await self._read_line()
                    except (EOFError, KeyboardInterrupt):
                        break
                    if await self.dispatcher.handle(line) is DispatchOutcome.QUIT:
                        break
            except asyncio.CancelledError:
                if self._signal is None:
                    raise
                # Cancelled by our own signal handler; finish the shutdown normally
                self._task.uncancel()
                LOGGER.info("received %s, shutting down", signal.Signals(self._signal).name)
            finally:
                await self.shutdown()
        return 0

    def request_shutdown(self, signum: int) -> None:
        """Signal handler: interrupt whatever the loop is awaiting."""
        if self._signal is not None or self._shut_down:
            return
        self._signal = signum
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def shutdown(self) -> None:
        if self._shut_down:
            return
        self._shut_down = True
        if self.client is not None:
            print("Disconnecting from server...")
            await self.client.close()
