# -*- coding: utf-8 -*-
# ARQUIVO: config.py

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

STRATEGIES = ("penalty", "dinkelbach")


@dataclass
class SolverSettings:
    """
    Parâmetros de execução do solver.

    Attributes:
        max_runtime_sec (int): Orçamento total de tempo, contado desde o início do processo.
        aisle_penalty (float): Penalidade α por corredor no objetivo linearizado.
        selection_threshold (float): Valor acima do qual uma variável binária é lida como 1.
        strategy (str): "penalty" (uma resolução) ou "dinkelbach" (iterações sobre o ratio).
        max_iterations (int): Limite de iterações do Dinkelbach.
        convergence_tol (float): Tolerância de convergência do Dinkelbach.
        verbose (bool): Mostra o log do Gurobi no console (OutputFlag).
        gurobi_params (Dict[str, Any]): Parâmetros extras repassados ao modelo, ex.: {"MIPFocus": 1}.
        iis_path (str): Se definido, grava o IIS do modelo aqui quando ele for inviável.
    """
    max_runtime_sec: int = 600
    aisle_penalty: float = 1000.0
    selection_threshold: float = 0.9
    strategy: str = "penalty"
    max_iterations: int = 25
    convergence_tol: float = 1e-6
    verbose: bool = False
    gurobi_params: Dict[str, Any] = field(default_factory=dict)
    iis_path: Optional[str] = None

    def __post_init__(self):
        if self.max_runtime_sec < 0:
            raise ValueError(f"max_runtime_sec deve ser >= 0, recebido {self.max_runtime_sec}")
        if self.aisle_penalty < 0:
            raise ValueError(f"aisle_penalty deve ser >= 0, recebido {self.aisle_penalty}")
        if not 0.0 < self.selection_threshold < 1.0:
            raise ValueError(
                f"selection_threshold deve estar em (0, 1), recebido {self.selection_threshold}")
        if self.strategy not in STRATEGIES:
            raise ValueError(f"Estratégia desconhecida '{self.strategy}'. Opções: {', '.join(STRATEGIES)}")
        if self.convergence_tol < 0:
            raise ValueError(f"convergence_tol deve ser >= 0, recebido {self.convergence_tol}")
        if self.max_iterations < 1:
            raise ValueError(f"max_iterations deve ser >= 1, recebido {self.max_iterations}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "SolverSettings":
        """
        Lê as configurações das variáveis de ambiente WAVE_*. Argumentos
        nomeados têm prioridade sobre o ambiente.
        """
        environ = os.environ if environ is None else environ
        values: Dict[str, Any] = {}
        if "WAVE_MAX_RUNTIME" in environ:
            values["max_runtime_sec"] = int(environ["WAVE_MAX_RUNTIME"])
        if "WAVE_AISLE_PENALTY" in environ:
            values["aisle_penalty"] = float(environ["WAVE_AISLE_PENALTY"])
        if "WAVE_SELECTION_THRESHOLD" in environ:
            values["selection_threshold"] = float(environ["WAVE_SELECTION_THRESHOLD"])
        if "WAVE_STRATEGY" in environ:
            values["strategy"] = environ["WAVE_STRATEGY"]
        values.update(overrides)
        return cls(**values)
