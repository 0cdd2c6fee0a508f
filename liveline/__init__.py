# __init__.py

from .logger import Logger
from .config import OutputSettings
from .errors import LivelineError, OutputClosedError
from .entry import Entry, Line
from .buffer import Buffer
from .terminal import Terminal
from .output import (
    Output,
    get_default_output,
    set_default_output,
    print_line,
    print_dynamic_line,
    set_max_fps,
    notify_external_line,
)

__all__ = [
    "Output", "Entry", "Line", "Buffer", "Terminal", "OutputSettings", "Logger",
    "LivelineError", "OutputClosedError",
    "get_default_output", "set_default_output",
    "print_line", "print_dynamic_line", "set_max_fps", "notify_external_line",
]
