# -*- coding: utf-8 -*-
"""
Seleção de pedidos e corredores para waves de separação (wave picking).
"""

from .checker import compute_objective_function, describe_solution, is_solution_feasible
from .config import SolverSettings
from .data_parser import InstanceParser, SolutionParser, write_solution_file
from .exceptions import ModelBuildError, NoIncumbentFound, SolverFailure, WavePickingError
from .model import Aisle, Instance, Order, Solution, SolveResult, SolveStatus
from .solver import WaveSolver
from .timer import Stopwatch

__version__ = "0.1.0"

__all__ = [
    "Aisle",
    "Instance",
    "InstanceParser",
    "ModelBuildError",
    "NoIncumbentFound",
    "Order",
    "Solution",
    "SolutionParser",
    "SolveResult",
    "SolveStatus",
    "SolverFailure",
    "SolverSettings",
    "Stopwatch",
    "WavePickingError",
    "WaveSolver",
    "compute_objective_function",
    "describe_solution",
    "is_solution_feasible",
    "write_solution_file",
]
