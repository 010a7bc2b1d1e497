import abc
import enum
import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Union

import numpy as np

logger = logging.getLogger(__name__)


class Verbosity(enum.Enum):
    SILENT = 'silent'
    PER_ITERATION = 'iter'
    FINAL_ONLY = 'final'

    @classmethod
    def parse(cls, value: Union['Verbosity', str]) -> 'Verbosity':
        if isinstance(value, cls):
            return value
        key = str(value).lower()
        for v in cls:
            if key in (v.value, v.name.lower()):
                return v
        raise ValueError(f"unknown verbosity: {value!r}")


@dataclass
class IterOptimOptions:
    maxiter: int = 100
    tol: float = 1e-6
    verbosity: Verbosity = Verbosity.SILENT

    def __post_init__(self):
        self.maxiter = int(self.maxiter)
        self.tol = float(self.tol)
        self.verbosity = Verbosity.parse(self.verbosity)
        if self.maxiter < 1:
            raise ValueError("maxiter must be at least 1.")
        if self.tol < 0:
            raise ValueError("tol must be non-negative.")


class IterOptimProblem(abc.ABC):
    """
    A problem solved by fixed-point iteration. The driver only sees these
    primitives; solutions are opaque buffers owned by the problem type.
    """

    @abc.abstractmethod
    def create_solution(self) -> Any:
        ...

    @abc.abstractmethod
    def check_compatible(self, sol) -> None:
        ...

    @abc.abstractmethod
    def initialize(self, sol) -> Any:
        ...

    @abc.abstractmethod
    def update(self, sol) -> Any:
        ...

    @abc.abstractmethod
    def objective(self, sol) -> float:
        ...


class IterativeSolver:
    def __init__(self, options: Optional[IterOptimOptions] = None):
        self.options = options if options is not None else IterOptimOptions()
        self.history: List[float] = []
        self.niters = 0
        self.converged = False

    def solve(self, problem: IterOptimProblem, solution=None):
        opts = self.options
        verbose_iter = opts.verbosity is Verbosity.PER_ITERATION
        if solution is None:
            solution = problem.create_solution()
        problem.initialize(solution)
        obj = problem.objective(solution)
        self.history = [obj]
        self.niters = 0
        self.converged = False
        if verbose_iter:
            logger.info("%6s  %15s  %12s", 'Iter', 'Objective', 'Change')
            logger.info("%6d  %15.6e", 0, obj)

        while not self.converged and self.niters < opts.maxiter:
            self.niters += 1
            problem.update(solution)
            obj_pre = obj
            obj = problem.objective(solution)
            self.history.append(obj)
            change = obj - obj_pre
            self.converged = abs(change) < opts.tol
            if verbose_iter:
                logger.info("%6d  %15.6e  %12.4e", self.niters, obj, change)

        if opts.verbosity is not Verbosity.SILENT:
            if self.converged:
                logger.info("Converged after %d iterations (objective = %.6e)", self.niters, obj)
            else:
                logger.info("Stopped after %d iterations without converging (objective = %.6e)",
                            self.niters, obj)
        return solution

    @property
    def objective_trace(self) -> np.ndarray:
        return np.asarray(self.history)


def solve(problem: IterOptimProblem, options: Optional[IterOptimOptions] = None, solution=None):
    return IterativeSolver(options).solve(problem, solution)
