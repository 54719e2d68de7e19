"""Core Game of Life logic."""

from .grid import Cell, LifeGrid
from .patterns import Pattern, PatternLibrary
from .simulation import Simulation, SimulationConfig
from .dense import dense_step

__all__ = ["Cell", "LifeGrid", "Pattern", "PatternLibrary", "Simulation", "SimulationConfig", "dense_step"]
