"""Example: How to use the Tracer while generating and solving puzzles.

This shows how to capture every placement, backtrack and cleared cell and
write them to a trace file.
"""

import random
from pathlib import Path
from typing import Optional

from src.sudoku.generator import PuzzleInstance, generate_puzzle
from src.sudoku.grid import render_grid
from src.utils.trace import get_tracer, reset_tracer


def generate_and_trace(
    difficulty: str = "medium",
    seed: Optional[int] = None,
    output_trace_csv: Optional[Path] = None,
) -> PuzzleInstance:
    """
    Generate a puzzle and log all steps to a trace file.

    Args:
        difficulty: easy, medium or hard
        seed: Optional seed for reproducible output
        output_trace_csv: Path to write trace CSV (optional)

    Returns:
        The generated PuzzleInstance
    """
    # Reset tracer for this puzzle
    reset_tracer()
    tracer = get_tracer()

    instance = generate_puzzle(difficulty, rng=random.Random(seed), tracer=tracer)

    summary = tracer.summary()
    print(f"\n{'='*50}")
    print(f"Generator Summary ({instance.difficulty.value}):")
    print(f"  Clues: {instance.clue_count}")
    print(f"  Total steps: {summary['total_steps']}")
    print(f"  Placements: {summary['num_placements']}")
    print(f"  Backtracks: {summary['num_backtracks']}")
    print(f"  Time: {summary['elapsed_time_seconds']:.3f}s")
    print(f"  Actions: {summary['action_counts']}")
    print(f"{'='*50}\n")

    if output_trace_csv:
        tracer.to_csv(output_trace_csv)

    return instance


if __name__ == "__main__":
    trace_output = Path("traces/example_trace.csv")
    puzzle = generate_and_trace("hard", seed=42, output_trace_csv=trace_output)
    print(render_grid(puzzle.puzzle))
