# -*- coding: utf-8 -*-
# ARQUIVO: exceptions.py


class WavePickingError(Exception):
    """Base de todos os erros do pacote."""


class ModelBuildError(WavePickingError):
    """
    Os dados da instância violam as invariantes do problema.

    É um erro de integridade: a instância está quebrada e não há como
    recuperar, então ele nunca é convertido em "sem solução".
    """


class SolverFailure(WavePickingError):
    """O Gurobi levantou um erro interno durante a construção ou a otimização."""


class NoIncumbentFound(WavePickingError):
    """O solver terminou (inviável ou limite de tempo) sem nenhuma solução candidata."""
