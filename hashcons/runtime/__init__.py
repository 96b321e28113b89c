"""Stream processing around the core passes."""

from hashcons.runtime.pipeline import (
    LineProcessor,
    LineResult,
    PipelineStats,
    process_line,
    read_lines,
)

__all__ = [
    'LineProcessor',
    'LineResult',
    'PipelineStats',
    'process_line',
    'read_lines',
]
