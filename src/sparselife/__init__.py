"""Conway's Game of Life on a sparse, unbounded grid."""

__version__ = "0.1.0"

from .core.grid import Cell, LifeGrid
from .core.patterns import Pattern, PatternLibrary
from .core.simulation import Simulation, SimulationConfig

__all__ = ["Cell", "LifeGrid", "Pattern", "PatternLibrary", "Simulation", "SimulationConfig"]
