"""
Testing subpackage for the dust simulation.

This subpackage provides tools for testing and debugging the simulation:
- Simple analytic panels and hand-placed grains for isolating transitions
- Validation functions for the population invariants

Example usage:
    from dust_simulation.testing import create_square_panel, run_quick_test

    # Simple geometry with known containment answers
    panel = create_square_panel(half_width=0.2)

    # Short validated run
    ok = run_quick_test()
"""

from .simple_panels import (
    create_square_panel,
    create_triangle_panel,
    create_offset_hex_panel,
    make_particle,
    create_single_particle_simulation,
    print_panel_info,
)

from .validation import (
    validate_polygon,
    validate_ensemble,
    validate_simulation_module,
    run_quick_test,
)

__all__ = [
    # Simple panels
    "create_square_panel",
    "create_triangle_panel",
    "create_offset_hex_panel",
    "make_particle",
    "create_single_particle_simulation",
    "print_panel_info",
    # Validation
    "validate_polygon",
    "validate_ensemble",
    "validate_simulation_module",
    "run_quick_test",
]
