"""
CSE Benchmark
=============

Times parse + CSE + render over generated expression lines, serially
and through the process pool.

Usage:
    python benchmarks/bench_cse.py
"""

import io
import random
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from hashcons.compiler.cse import eliminate_common_subexpressions
from hashcons.compiler.printer import render
from hashcons.frontend.parser import parse
from hashcons.runtime.pipeline import LineProcessor
from hashcons.utils.timing import StageTimer, format_ns


LINES = 5000
DEPTH = 10
SEED = 1234


def random_line(rng: random.Random, depth: int) -> str:
    if depth == 0 or rng.random() < 0.25:
        return rng.choice(["a", "b", "c", "x"])
    name = rng.choice(["f", "g", "h"])
    return f"{name}({random_line(rng, depth - 1)},{random_line(rng, depth - 1)})"


def bench_stage(timer: StageTimer, label: str, func, items) -> list:
    with timer.stage(label):
        results = [func(item) for item in items]
    elapsed = timer.totals[label]
    per_item = elapsed / max(1, len(items))
    print(f"  {label:<10} {format_ns(elapsed):>12}  ({format_ns(per_item)}/line)")
    return results


def bench_pipeline(label: str, processor: LineProcessor, text: str):
    out = io.StringIO()
    stats = processor.run(io.StringIO(text), out)
    print(f"  {label:<10} {format_ns(stats.elapsed_ns):>12}  ({stats.lines_written} lines)")
    print(f"  {'':<10} {processor.timer.summary()}")


def main():
    rng = random.Random(SEED)
    lines = [random_line(rng, DEPTH) for _ in range(LINES)]
    print(f"{LINES} lines, depth <= {DEPTH}")

    timer = StageTimer()
    trees = bench_stage(timer, "parse", parse, lines)
    rewritten = bench_stage(timer, "cse", eliminate_common_subexpressions, trees)
    bench_stage(timer, "render", render, rewritten)

    text = f"{len(lines)}\n" + "\n".join(lines) + "\n"
    bench_pipeline("serial", LineProcessor(), text)
    bench_pipeline("parallel", LineProcessor(workers=None, min_parallel_size=1), text)


if __name__ == "__main__":
    main()
