"""
Physical constants and simulation diagnostics.
"""

from scipy.constants import g as EARTH_GRAVITY  # m/s^2, standard gravity

# Physical constants
MARTIAN_GRAVITY = 3.71  # m/s^2
SPHERE_VOLUME_FACTOR = 4.0 / 3.0  # V = 4/3 pi r^3

# Debug flag
DEBUG = False

# Global statistics for rejection sampling inside the panel polygon
SAMPLING_STATS = {
    'total_samples': 0,
    'total_draws': 0,
    'retry_cap_hits': 0,
}


def reset_sampling_stats():
    """Reset rejection sampling statistics counters."""
    # in place, other modules hold a reference to this dict
    for key in SAMPLING_STATS:
        SAMPLING_STATS[key] = 0


def get_sampling_stats() -> dict:
    """Return a copy of the current rejection sampling counters."""
    return dict(SAMPLING_STATS)


def print_sampling_stats():
    """Print statistics about spawn-point rejection sampling.

    For the hex panel about 65% of the draws from the bounding
    square are accepted. A much lower rate, or any retry cap hit, points to a
    degenerate boundary polygon or a tiny sampling scale.
    """
    stats = SAMPLING_STATS
    total = stats['total_samples']

    if total == 0:
        print("No spawn samples recorded.")
        return

    draws = stats['total_draws']
    acceptance = (total - stats['retry_cap_hits']) / draws if draws else 0.0

    print("\n" + "="*60)
    print("SPAWN SAMPLING STATISTICS")
    print("="*60)
    print(f"Spawn points sampled:      {total:,}")
    print(f"Candidate draws:           {draws:,}")
    print(f"Acceptance ratio:          {acceptance:.3f}")
    print(f"Retry cap hits (centroid): {stats['retry_cap_hits']:,}")
    print("="*60)

    if stats['retry_cap_hits'] > 0:
        print("⚠️  WARNING: retry cap reached")
        print("   Check the boundary polygon and the spawn scale")
    elif acceptance < 0.5:
        print("ℹ️  INFO: low acceptance ratio (<50%)")
        print("   Polygon fills its bounding square poorly")
    else:
        print("✓ Sampling looks healthy")
    print()
