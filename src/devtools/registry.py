"""Static catalog of the Chrome DevTools MCP tools.

The registry is documentation only: the dispatcher never consults it before
sending a call, so a tool the server adds later still works even if it is
missing here.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, List, Mapping, Tuple


@dataclass(frozen=True)
class CommandDescriptor:
    name: str
    summary: str
    detail: str = ""


class UnknownCommandError(KeyError):
    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown command: {self.name}"


class CommandRegistry:
    def __init__(self, descriptors: Iterable[CommandDescriptor]):
        table = {}
        for descriptor in descriptors:
            if descriptor.name in table:
                raise ValueError(f"Duplicate command name: {descriptor.name}")
            table[descriptor.name] = descriptor
        self._table: Mapping[str, CommandDescriptor] = MappingProxyType(table)

    def lookup(self, name: str) -> CommandDescriptor:
        try:
            return self._table[name.strip()]
        except KeyError:
            raise UnknownCommandError(name) from None

    def describe_all(self) -> List[Tuple[str, str]]:
        return [(d.name, d.summary) for d in self._table.values()]

    def names(self) -> List[str]:
        return list(self._table)


_UID = "The uid of an element on the page from the page content snapshot"
_TIMEOUT = "Maximum wait time in milliseconds. If set to 0, the default timeout will be used."

DEVTOOLS_COMMANDS: Tuple[CommandDescriptor, ...] = (
    CommandDescriptor(
        "click",
        "Clicks on the provided element",
        f"""
- uid (required): string - {_UID}
- dblClick: boolean - Set to true for double clicks. Default is false.
""",
    ),
    CommandDescriptor(
        "close_page",
        "Closes the page by its index. The last open page cannot be closed.",
        """
- pageIdx (required): number - The index of the page to close. Call list_pages to list pages.
""",
    ),
    CommandDescriptor(
        "drag",
        "Drag an element onto another element",
        """
- from_uid (required): string - The uid of the element to drag
- to_uid (required): string - The uid of the element to drop into
""",
    ),
    CommandDescriptor(
        "emulate",
        "Emulates various features on the selected page.",
        """
- networkConditions: string - Throttle network. Set to "No emulation" to disable. If omitted, conditions remain unchanged.
- cpuThrottlingRate: number - Represents the CPU slowdown factor. Set the rate to 1 to disable throttling. If omitted, throttling remains unchanged.
""",
    ),
    CommandDescriptor(
        "evaluate_script",
        "Evaluate a JavaScript function inside the currently selected page. Returns the response as JSON "
        "so returned values have to JSON-serializable.",
        """
- function (required): string - A JavaScript function declaration to be executed by the tool in the currently selected page.
Example without arguments:
() => {return document.title} or
async () => {return await fetch("example.com")}.
Example with arguments:
(el) => {return el.innerText;}
- args: array - An optional list of arguments to pass to the function.
""",
    ),
    CommandDescriptor(
        "fill",
        "Type text into a input, text area or select an option from a <select> element.",
        f"""
- uid (required): string - {_UID}
- value (required): string - The value to fill in
""",
    ),
    CommandDescriptor(
        "fill_form",
        "Fill out multiple form elements at once",
        """
- elements (required): array - Elements from snapshot to fill out.
""",
    ),
    CommandDescriptor(
        "get_console_message",
        "Gets a console message by its ID. You can get all messages by calling list_console_messages.",
        """
- msgid (required): number - The msgid of a console message on the page from the listed console messages
""",
    ),
    CommandDescriptor(
        "get_network_request",
        "Gets a network request by an optional reqid, if omitted returns the currently selected request "
        "in the DevTools Network panel.",
        """
- reqid: number - The reqid of the network request. If omitted returns the currently selected request in the DevTools Network panel
""",
    ),
    CommandDescriptor(
        "handle_dialog",
        "If a browser dialog was opened, use this command to handle it",
        """
- action (required): string - Whether to dismiss or accept the dialog
- promptText: string - Optional prompt text to enter into the dialog.
""",
    ),
    CommandDescriptor(
        "hover",
        "Hover over the provided element",
        f"""
- uid (required): string - {_UID}
""",
    ),
    CommandDescriptor(
        "list_console_messages",
        "List all console messages for the currently selected page since the last navigation.",
        """
- pageSize: integer - Maximum number of messages to return. When omitted, returns all requests.
- pageIdx: integer - Page number to return (0-based). When omitted, returns the first page.
- types: array - Filter messages to only return messages of the specified resource types. When omitted or empty, returns all messages.
- includePreservedMessages: boolean - Set to true to return the preserved messages over the last 3 navigations.
""",
    ),
    CommandDescriptor(
        "list_network_requests",
        "List all requests for the currently selected page since the last navigation.",
        """
- pageSize: integer - Maximum number of requests to return. When omitted, returns all requests.
- pageIdx: integer - Page number to return (0-based). When omitted, returns the first page.
- resourceTypes: array - Filter requests to only return requests of the specified resource types. When omitted or empty, returns all requests.
- includePreservedRequests: boolean - Set to true to return the preserved requests over the last 3 navigations.
""",
    ),
    CommandDescriptor("list_pages", "Get a list of pages open in the browser."),
    CommandDescriptor(
        "navigate_page",
        "Navigates the currently selected page to a URL.",
        f"""
- type: string - Navigate the page by URL, back or forward in history, or reload.
- url: string - Target URL (only type=url)
- ignoreCache: boolean - Whether to ignore cache on reload.
- timeout: integer - {_TIMEOUT}
""",
    ),
    CommandDescriptor(
        "new_page",
        "Creates a new page",
        f"""
- url (required): string - URL to load in a new page.
- timeout: integer - {_TIMEOUT}
""",
    ),
    CommandDescriptor(
        "performance_analyze_insight",
        "Provides more detailed information on a specific Performance Insight of an insight set that was "
        "highlighted in the results of a trace recording.",
        """
- insightSetId (required): string - The id for the specific insight set. Only use the ids given in the "Available insight sets" list.
- insightName (required): string - The name of the Insight you want more information on. For example: "DocumentLatency" or "LCPBreakdown"
""",
    ),
    CommandDescriptor(
        "performance_start_trace",
        "Starts a performance trace recording on the selected page. This can be used to look for performance "
        "problems and insights to improve the performance of the page. It will also report Core Web Vital (CWV) "
        "scores for the page.",
        """
- reload (required): boolean - Determines if, once tracing has started, the page should be automatically reloaded.
- autoStop (required): boolean - Determines if the trace recording should be automatically stopped.
""",
    ),
    CommandDescriptor(
        "performance_stop_trace",
        "Stops the active performance trace recording on the selected page.",
    ),
    CommandDescriptor(
        "press_key",
        "Press a key or key combination. Use this when other input methods like fill() cannot be used "
        "(e.g., keyboard shortcuts, navigation keys, or special key combinations).",
        """
- key (required): string - A key or a combination (e.g., "Enter", "Control+A", "Control++", "Control+Shift+R"). Modifiers: Control, Shift, Alt, Meta
""",
    ),
    CommandDescriptor(
        "resize_page",
        "Resizes the selected page's window so that the page has specified dimension",
        """
- width (required): number - Page width
- height (required): number - Page height
""",
    ),
    CommandDescriptor(
        "select_page",
        "Select a page as a context for future tool calls.",
        """
- pageIdx (required): number - The index of the page to select. Call list_pages to list pages.
""",
    ),
    CommandDescriptor(
        "take_screenshot",
        "Take a screenshot of the page or element.",
        """
- format: string - Type of format to save the screenshot as. Default is "png"
- quality: number - Compression quality for JPEG and WebP formats (0-100). Higher values mean better quality but larger file sizes. Ignored for PNG format.
- uid: string - The uid of an element on the page from the page content snapshot. If omitted takes a pages screenshot.
- fullPage: boolean - If set to true takes a screenshot of the full page instead of the currently visible viewport. Incompatible with uid.
- filePath: string - The absolute path, or a path relative to the current working directory, to save the screenshot to instead of attaching it to the response.
""",
    ),
    CommandDescriptor(
        "take_snapshot",
        "Take a text snapshot of the currently selected page based on the a11y tree. The snapshot lists page "
        "elements along with a unique identifier (uid). Always use the latest snapshot. Prefer taking a snapshot "
        "over taking a screenshot. The snapshot indicates the element selected in the DevTools Elements panel "
        "(if any).",
        """
- verbose: boolean - Whether to include all possible information available in the full a11y tree. Default is false.
- filePath: string - The absolute path, or a path relative to the current working directory, to save the snapshot to instead of attaching it to the response.
""",
    ),
    CommandDescriptor(
        "upload_file",
        "Upload a file through a provided element.",
        """
- uid (required): string - The uid of the file input element or an element that will open file chooser on the page from the page content snapshot
- filePath (required): string - The local path of the file to upload
""",
    ),
    CommandDescriptor(
        "wait_for",
        "Wait for the specified text to appear on the selected page.",
        f"""
- text (required): string - Text to appear on the page
- timeout: integer - {_TIMEOUT}
""",
    ),
)

REGISTRY = CommandRegistry(DEVTOOLS_COMMANDS)
