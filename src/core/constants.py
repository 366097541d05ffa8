"""Core constants for cross-module use."""

APP_VERSION = "1.0.1"

# Client identity sent in the MCP initialize handshake
CLIENT_NAME = "chrome-devtools-cli"
HEADLESS_CLIENT_NAME = "chrome-devtools-cli-headless"
CLIENT_VERSION = "1"

DEFAULT_SERVER_COMMAND = "npx"
DEFAULT_SERVER_ARGS = "-y chrome-devtools-mcp@latest"
DEFAULT_BROWSER_URL = "http://127.0.0.1:9222"

HEADLESS_FLAG = "--headless"
HEADLESS_SERVER_ARG = "--headless=true"

DEFAULT_PROMPT = "chrome> "

QUIT_COMMANDS = frozenset({"exit", "quit", "q"})
HELP_COMMANDS = frozenset({"help", "?"})
LIST_COMMAND = "commands"
CLEAR_COMMAND = "clear"
HELP_FLAGS = frozenset({"-h", "--help"})
