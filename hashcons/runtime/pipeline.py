"""
Line Pipeline
=============

Drives the core over a text stream, one expression per line:

    parse -> eliminate common subexpressions -> render

Stream layout
-------------
The first line holds a declared count of the expression lines that
follow. It is read and thrown away; every remaining line is processed
whether or not the count agrees. Each output line corresponds to one
input expression line, in order.

Every line gets a fresh dedup table, so lines are independent and a
large batch can be spread over a process pool without changing the
output.

Error modes
-----------
strict (default): the first line that fails to parse aborts the run
    with a ParseError naming the line. Lines before it have already
    been written.
keep_going: failing lines are logged, counted and skipped.
"""

import logging
import os
import re
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from typing import IO, Dict, Iterable, Iterator, List, Optional, Tuple

from hashcons.compiler.cse import eliminate_common_subexpressions
from hashcons.compiler.printer import render
from hashcons.frontend.parser import ParseError, parse
from hashcons.utils.timing import StageTimer, format_ns

logger = logging.getLogger(__name__)

# Line terminators of the input format; \r\n counts as one
_LINE_BREAK_CHARS = "\n\r\x0b\x0c\x85\u2028\u2029"
_LINE_BREAK = re.compile(r"\r\n|[\n\r\x0b\x0c\x85\u2028\u2029]")


def process_line(line: str, timer: Optional[StageTimer] = None) -> str:
    """Parse, rewrite and render a single expression line."""
    if timer is None:
        timer = StageTimer()
    with timer.stage('parse'):
        tree = parse(line)
    with timer.stage('cse'):
        rewritten = eliminate_common_subexpressions(tree)
    with timer.stage('render'):
        return render(rewritten)


@dataclass
class LineResult:
    """Outcome of processing one expression line."""
    number: int
    output: Optional[str] = None
    error: Optional[str] = None
    position: int = -1
    stage_ns: Dict[str, int] = field(default_factory=dict)


@dataclass
class PipelineStats:
    """Counters accumulated over the runs of a LineProcessor."""
    lines_read: int = 0
    lines_written: int = 0
    lines_failed: int = 0
    parallel_batches: int = 0
    elapsed_ns: int = 0
    stage_ns: Dict[str, int] = field(default_factory=dict)


def _process_numbered(number: int, line: str) -> LineResult:
    timer = StageTimer()
    try:
        output = process_line(line, timer)
    except ParseError as e:
        return LineResult(
            number, error=str(e), position=e.position, stage_ns=dict(timer.totals),
        )
    return LineResult(number, output=output, stage_ns=dict(timer.totals))


def _worker_apply(chunk: List[Tuple[int, str]]) -> List[LineResult]:
    """Worker function for the process pool."""
    return [_process_numbered(number, line) for number, line in chunk]


def read_lines(stream: IO[str]) -> List[str]:
    """Read a whole stream and split it into lines without terminators."""
    text = stream.read().strip(_LINE_BREAK_CHARS)
    if not text:
        return []
    return _LINE_BREAK.split(text)


class LineProcessor:
    """
    Applies the core to every expression line of an input stream.

    Usage:
        >>> import io
        >>> out = io.StringIO()
        >>> stats = LineProcessor().run(io.StringIO("1\\nf(a,a)\\n"), out)
        >>> out.getvalue()
        'f(a,2)\\n'
    """

    MIN_PARALLEL_SIZE = 1000  # Lines before a process pool is worth it
    CHUNK_SIZE = 250          # Lines per pool task

    def __init__(
        self,
        workers: Optional[int] = 1,
        keep_going: bool = False,
        min_parallel_size: int = MIN_PARALLEL_SIZE,
        chunk_size: int = CHUNK_SIZE,
        enable_logging: bool = False,
    ):
        self.workers = workers or max(1, (os.cpu_count() or 2) - 1)
        self.keep_going = keep_going
        self.min_parallel_size = min_parallel_size
        self.chunk_size = max(1, chunk_size)
        self.timer = StageTimer()
        self.stats = PipelineStats(stage_ns=self.timer.totals)

        if enable_logging:
            logging.basicConfig(level=logging.DEBUG)

    def process(self, lines: Iterable[str]) -> List[str]:
        """Return the rendered output for each line that succeeds."""
        return list(self.iter_outputs(lines))

    def iter_outputs(self, lines: Iterable[str]) -> Iterator[str]:
        for result in self._evaluate(list(lines)):
            self.timer.merge(result.stage_ns)
            if result.error is None:
                yield result.output
                continue

            self.stats.lines_failed += 1
            if not self.keep_going:
                raise ParseError(f"line {result.number}: {result.error}", result.position)
            logger.error(f"Skipping line {result.number}: {result.error}")

    def run(self, stream_in: IO[str], stream_out: IO[str]) -> PipelineStats:
        """Process ``stream_in`` and write one line per result to ``stream_out``."""
        clock = StageTimer()
        with clock.stage('run'):
            try:
                lines = read_lines(stream_in)
                if lines:
                    declared, body = lines[0], lines[1:]
                    self._check_declared_count(declared, len(body))
                    self.stats.lines_read += len(body)
                    for output in self.iter_outputs(body):
                        stream_out.write(output + '\n')
                        self.stats.lines_written += 1
            finally:
                stream_out.flush()

        elapsed = clock.totals['run']
        self.stats.elapsed_ns += elapsed
        logger.debug(
            f"Processed {self.stats.lines_read} lines in {format_ns(elapsed)} "
            f"({self.timer.summary()})"
        )
        return self.stats

    def _evaluate(self, lines: List[str]) -> Iterator[LineResult]:
        numbered = list(enumerate(lines, start=1))
        if self.workers > 1 and len(numbered) >= self.min_parallel_size:
            return self._parallel_evaluate(numbered)
        return (_process_numbered(number, line) for number, line in numbered)

    def _parallel_evaluate(self, numbered: List[Tuple[int, str]]) -> Iterator[LineResult]:
        chunks = [
            numbered[i:i + self.chunk_size]
            for i in range(0, len(numbered), self.chunk_size)
        ]
        self.stats.parallel_batches += 1
        logger.debug(
            f"Dispatching {len(numbered)} lines in {len(chunks)} chunks "
            f"to {self.workers} workers"
        )
        with ProcessPoolExecutor(max_workers=self.workers) as pool:
            for results in pool.map(_worker_apply, chunks):
                yield from results

    def _check_declared_count(self, declared: str, actual: int):
        try:
            expected = int(declared.strip())
        except ValueError:
            logger.debug(f"Ignoring non-numeric line count {declared!r}")
            return
        if expected != actual:
            logger.debug(f"Declared {expected} lines but found {actual}")
