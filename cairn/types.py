from __future__ import annotations

from typing import Literal, TypeAlias

# =============================================================================
# SPATIAL TYPES
# =============================================================================

TileCoord: TypeAlias = int  # Always integer tile position

# Grid steps
UnitStep: TypeAlias = Literal[-1, 0, 1]
StepOffset: TypeAlias = tuple[UnitStep, UnitStep]  # Example: (-1, 0) = westward step

# =============================================================================
# GENERATION TYPES
# =============================================================================

# Random seed for deterministic generation.
# Can be an int for numeric seeds or a descriptive string like "burrito1".
RandomSeed: TypeAlias = int | str | None

# Unique key of a definition within its collection (e.g., "Cell", "Vault")
DefinitionName: TypeAlias = str

# Implementation name selected by a worker's ``class`` attribute (e.g., "Default")
WorkerClassName: TypeAlias = str
