"""Shared position model and the protocol-independent positions pipeline.

Import the submodules directly (``positions_core.models``,
``positions_core.positions_service`` ...); ``calc_core`` depends on
``models`` so this package keeps no eager imports.
"""

__all__ = [
    "errors",
    "interfaces",
    "models",
    "position_normalizer",
    "positions_service",
    "position_report",
]
