# -*- coding: utf-8 -*-
# ARQUIVO: timer.py

import time


class Stopwatch:
    """
    Cronômetro de parede. O solver só recebe a leitura de tempo decorrido
    para calcular quanto resta do orçamento.
    """

    def __init__(self):
        self._start = None

    def start(self) -> "Stopwatch":
        self._start = time.time()
        return self

    def elapsed(self) -> float:
        """Segundos desde start(); 0.0 se o cronômetro ainda não foi iniciado."""
        if self._start is None:
            return 0.0
        return time.time() - self._start
