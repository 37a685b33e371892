"""Output formatting -- ANSI terminal colors and timestamped log-file lines."""

import sys
from datetime import datetime

_RESET = '\033[0m'
_DIM = '\033[2m'
_GREEN = '\033[32m'
_YELLOW = '\033[33m'
_BOLD_RED = '\033[1;31m'
_BOLD_CYAN = '\033[1;36m'


def _is_tty():
    """Check if stdout is a terminal (not piped)."""
    try:
        return sys.stdout.isatty()
    except AttributeError:
        return False


# Set once at import time
_USE_COLOR = _is_tty()


def set_color_enabled(enabled: bool):
    """Override automatic color detection."""
    global _USE_COLOR
    _USE_COLOR = enabled


def _c(code: str, text: str) -> str:
    if _USE_COLOR:
        return f'{code}{text}{_RESET}'
    return text


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

def cli_header(text: str) -> str:
    """Bold cyan header line."""
    return _c(_BOLD_CYAN, text)


def cli_success(text: str) -> str:
    """Green text for a measured file."""
    return _c(_GREEN, text)


def cli_warning(text: str) -> str:
    return _c(_YELLOW, text)


def cli_error(text: str) -> str:
    """Red text for a file that could not be measured."""
    return _c(_BOLD_RED, text)


def cli_dim(text: str) -> str:
    return _c(_DIM, text)


# ---------------------------------------------------------------------------
# Log file (plain text, timestamped)
# ---------------------------------------------------------------------------

def _timestamp() -> str:
    return datetime.now().strftime('%Y-%m-%d %H:%M:%S')


def log_info(msg: str) -> str:
    """Format a log file INFO line."""
    return f'[{_timestamp()}] [INFO]  {msg}'


def log_error(msg: str) -> str:
    """Format a log file ERROR line."""
    return f'[{_timestamp()}] [ERROR] {msg}'
