"""
Profiling script for PyTutte performance analysis.

Each scenario generates a graph and animates it to convergence without a
timer, so the numbers show where a tick spends its time (the crossing
check dominates as the edge count grows).
"""

import cProfile
import pstats
import io
from pstats import SortKey
import logging
import time

from pytutte import Animation, generate, arrange_boundary
from pytutte.logging_config import setup_logging


def animate(n_vertices, max_ticks, check_interval=1, convex=False):
    """Generate a graph with n vertices and tick it to convergence."""
    graph = generate(n_vertices, seed=42)
    if convex:
        arrange_boundary(graph)

    animation = Animation(graph).check_interval(check_interval)
    animation.run(max_ticks)
    return animation


def profile_small_graph():
    """Profile a small graph (15 vertices)."""
    animate(15, 2000)


def profile_medium_graph():
    """Profile a medium graph (100 vertices)."""
    animate(100, 300)


def profile_large_graph():
    """Profile a large graph (300 vertices)."""
    animate(300, 50)


def profile_sparse_checks():
    """Profile a medium graph checking planarity every 10 ticks."""
    animate(100, 300, check_interval=10)


def profile_convex_boundary():
    """Profile a medium graph with its boundary on a circle."""
    animate(100, 300, convex=True)


def benchmark_scenario(name, func):
    """Benchmark a scenario and print timing."""
    print(f"\n{'='*60}")
    print(f"Profiling: {name}")
    print('='*60)

    profiler = cProfile.Profile()

    start_time = time.time()
    profiler.enable()
    func()
    profiler.disable()
    elapsed = time.time() - start_time

    print(f"\nTotal time: {elapsed:.3f}s")

    s = io.StringIO()
    ps = pstats.Stats(profiler, stream=s).sort_stats(SortKey.CUMULATIVE)
    ps.print_stats(20)  # Top 20 functions

    print("\nTop 20 functions by cumulative time:")
    print(s.getvalue())

    return profiler


def main():
    """Run all profiling scenarios."""
    setup_logging(logging.WARNING)

    print("PyTutte Performance Profiling")
    print("=" * 60)

    scenarios = [
        ("Small Graph (15 vertices)", profile_small_graph),
        ("Medium Graph (100 vertices)", profile_medium_graph),
        ("Large Graph (300 vertices)", profile_large_graph),
        ("Sparse Checks (100 vertices, every 10 ticks)", profile_sparse_checks),
        ("Convex Boundary (100 vertices)", profile_convex_boundary),
    ]

    profilers = {}
    for name, func in scenarios:
        profilers[name] = benchmark_scenario(name, func)

    print("\n" + "="*60)
    print("Saving detailed profiles...")
    print("="*60)

    for name, profiler in profilers.items():
        filename = f"profile_{name.lower().replace(' ', '_').replace('(', '').replace(')', '').replace(',', '')}.prof"
        profiler.dump_stats(filename)
        print(f"Saved: {filename}")

    print("\nTo view detailed profile, use:")
    print("  python -m pstats <profile_file>")
    print("  then type 'stats' or 'sort cumulative' and 'stats 50'")


if __name__ == "__main__":
    main()
