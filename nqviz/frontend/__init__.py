"""
Terminal front end and exports for the N-Queens visualizer.

This package contains:
- console: terminal board, log and solution printers, prompt and signal wiring
- frames: numpy frame capture for animated exports
- reporting: CSV exports, event summaries and search-effort collection
- plots: solution grid, heatmap, effort chart and GIF animation
- cli: argument parser, configuration loading and entry point
"""

from .console import ConsoleLog, ConsolePrompt, ConsoleSolutions, TerminalBoard, install_signal_handlers
from .frames import FrameRecorder

__all__ = [
    # sinks
    "TerminalBoard",
    "ConsoleLog",
    "ConsoleSolutions",
    "ConsolePrompt",
    "FrameRecorder",
    # wiring
    "install_signal_handlers",
]
