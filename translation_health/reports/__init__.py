"""Report modules."""

from .json_reporter import JSONReporter
from .console_reporter import ConsoleReporter
from .markdown_reporter import MarkdownReporter

__all__ = [
    'JSONReporter',
    'ConsoleReporter',
    'MarkdownReporter',
]
