# -*- coding: utf-8 -*-
# ARQUIVO: solver.py

import logging
import time
from typing import Optional, Tuple

import gurobipy as gp
from gurobipy import GRB

from .checker import compute_objective_function, describe_solution
from .config import SolverSettings
from .exceptions import NoIncumbentFound, SolverFailure
from .model import Instance, Solution, SolveResult, SolveStatus

logger = logging.getLogger(__name__)

_STATUS_NAMES = {
    GRB.OPTIMAL: "ótima",
    GRB.INFEASIBLE: "inviável",
    GRB.INF_OR_UNBD: "inviável ou ilimitado",
    GRB.UNBOUNDED: "ilimitado",
    GRB.TIME_LIMIT: "limite de tempo",
    GRB.INTERRUPTED: "interrompido",
}


class WaveSolver:
    """
    Encapsula a modelagem e a resolução do problema de seleção de waves
    usando Gurobi.

    Cada tentativa de resolução constrói um modelo novo dentro de um
    ambiente Gurobi próprio, liberado ao final mesmo em caso de erro.
    """

    def __init__(self, instance: Instance, settings: Optional[SolverSettings] = None):
        """
        Args:
            instance (Instance): O objeto com os dados do problema (somente leitura).
            settings (SolverSettings): Orçamento de tempo, penalidade, limiar e estratégia.
        """
        self.instance = instance
        self.settings = settings if settings is not None else SolverSettings()

    def get_remaining_time(self, elapsed_sec: float) -> int:
        """
        Tempo restante do orçamento em segundos inteiros, nunca negativo.
        """
        return max(int(self.settings.max_runtime_sec - elapsed_sec), 0)

    def _build_model(self, model: gp.Model, aisle_penalty: float) -> Tuple[gp.tupledict, gp.tupledict]:
        """
        Constrói variáveis, objetivo e restrições no modelo recebido.

        Objetivo original: max (Σu_o * x_o) / (Σy_a). Como não é linear, o
        modelo maximiza Σu_o * x_o - α * Σy_a. Isto é uma aproximação: o
        valor real de uma solução vem de compute_objective_function.

        Returns:
            As variáveis x (pedidos) e y (corredores), indexadas pelo id.
        """
        instance = self.instance
        logger.info("Construindo o modelo: %d pedidos, %d corredores, %d itens (α=%s).",
                    instance.num_orders, instance.num_aisles, instance.num_items, aisle_penalty)

        # --- 1. VARIÁVEIS DE DECISÃO ---
        # x_o = 1 se o pedido o está na wave; y_a = 1 se o corredor a é visitado.
        x = model.addVars((order.id for order in instance.orders), vtype=GRB.BINARY, name="x")
        y = model.addVars((aisle.id for aisle in instance.aisles), vtype=GRB.BINARY, name="y")

        # --- 2. FUNÇÃO OBJETIVO LINEARIZADA ---
        total_units_in_wave = gp.quicksum(order.total_units * x[order.id] for order in instance.orders)
        total_aisles = gp.quicksum(y[aisle.id] for aisle in instance.aisles)
        model.setObjective(total_units_in_wave - aisle_penalty * total_aisles, GRB.MAXIMIZE)

        # --- 3. RESTRIÇÕES ---
        # LB <= Σu_o * x_o <= UB
        model.addConstr(total_units_in_wave >= instance.min_wave_size, "min_wave_size")
        model.addConstr(total_units_in_wave <= instance.max_wave_size, "max_wave_size")

        # Demanda <= oferta, item a item. Itens que nenhum pedido contém
        # não geram linha (0 <= oferta sempre vale).
        aisles_by_item = instance.item_locations()
        for item_id, relevant_orders in sorted(instance.orders_by_item().items()):
            demand = gp.quicksum(instance.orders[o_id].items[item_id] * x[o_id] for o_id in relevant_orders)
            supply = gp.quicksum(instance.aisles[a_id].inventory[item_id] * y[a_id]
                                 for a_id in aisles_by_item.get(item_id, []))
            model.addConstr(demand <= supply, f"inventory_sufficiency_{item_id}")

        # Pelo menos um corredor: evita a razão 0/0.
        model.addConstr(total_aisles >= 1, "at_least_one_aisle")

        return x, y

    def _extract_solution(self, model: gp.Model, x: gp.tupledict, y: gp.tupledict) -> SolveResult:
        status_name = _STATUS_NAMES.get(model.Status, str(model.Status))

        if model.SolCount == 0:
            message = f"Nenhuma solução viável encontrada (status: {status_name})."
            logger.warning(message)
            if model.Status in (GRB.INFEASIBLE, GRB.INF_OR_UNBD) and self.settings.iis_path:
                self._write_iis(model)
            return SolveResult.no_incumbent(message)

        threshold = self.settings.selection_threshold
        selected_orders = [o_id for o_id, var in x.items() if var.X > threshold]
        visited_aisles = [a_id for a_id, var in y.items() if var.X > threshold]

        logger.info("Solução encontrada (status: %s). Objetivo linearizado: %.4f",
                    status_name, model.ObjVal)
        return SolveResult.found_with(Solution.of(selected_orders, visited_aisles), model.ObjVal)

    def _write_iis(self, model: gp.Model):
        """
        Grava o subconjunto de restrições conflitantes. Uma falha aqui só é
        registrada: o resultado continua sendo "sem solução".
        """
        try:
            model.computeIIS()
            model.write(self.settings.iis_path)
            logger.info("Subconjunto de restrições conflitantes salvo em '%s'.", self.settings.iis_path)
        except gp.GurobiError as e:
            logger.warning("Não foi possível gravar o IIS em '%s': %s - %s",
                           self.settings.iis_path, e.errno, e.message)

    def _solve_once(self, aisle_penalty: float, time_limit: int) -> SolveResult:
        """
        Uma tentativa completa: constrói, otimiza e libera o modelo.
        Erros do Gurobi viram um resultado de falha, nunca uma solução parcial.
        """
        try:
            with gp.Env(empty=True) as env:
                env.setParam("OutputFlag", 1 if self.settings.verbose else 0)
                env.start()
                with gp.Model("wave_order_selection", env=env) as model:
                    x, y = self._build_model(model, aisle_penalty)

                    logger.info("Iniciando otimização com limite de tempo de %d segundos...", time_limit)
                    model.setParam("TimeLimit", time_limit)
                    for name, value in self.settings.gurobi_params.items():
                        model.setParam(name, value)

                    model.optimize()
                    return self._extract_solution(model, x, y)
        except gp.GurobiError as e:
            message = f"Erro do Gurobi: {e.errno} - {e.message}"
            logger.error(message)
            return SolveResult.failure(message)

    def _solve_dinkelbach(self, elapsed_sec: float) -> SolveResult:
        """
        Algoritmo de Dinkelbach: resolve max Σu_o * x_o - R * Σy_a para uma
        sequência crescente de R, onde R é a razão real da última solução.
        Converge quando o ótimo do subproblema F(R) chega a zero.
        """
        settings = self.settings
        local_start = time.time()
        ratio = 0.0
        best: Optional[SolveResult] = None
        best_value = 0.0
        last: Optional[SolveResult] = None

        for iteration in range(settings.max_iterations):
            remaining = self.get_remaining_time(elapsed_sec + time.time() - local_start)
            if iteration > 0 and remaining <= 0:
                logger.info("Tempo limite global atingido. Finalizando.")
                break

            logger.info("--- Iteração %d (Ratio Atual = %.6f, Limite de Tempo = %ds) ---",
                        iteration + 1, ratio, remaining)
            last = self._solve_once(ratio, remaining)
            if not last.found:
                break

            value = compute_objective_function(self.instance, last.solution)
            if best is None or value > best_value:
                best, best_value = last, value

            if last.surrogate_objective <= settings.convergence_tol:
                logger.info("Convergência atingida. F(R) = %.6f <= %s.",
                            last.surrogate_objective, settings.convergence_tol)
                break
            if value <= ratio + settings.convergence_tol:
                logger.info("Nenhuma melhoria significativa nesta iteração. Finalizando.")
                break

            logger.info("Solução melhorada encontrada. Novo Ratio = %.6f", value)
            ratio = value

        if best is None:
            return last if last is not None else SolveResult.no_incumbent("Nenhuma iteração executada.")
        return best

    def solve(self, elapsed_sec: float = 0.0) -> SolveResult:
        """
        Resolve a instância com o tempo que resta do orçamento global.

        Args:
            elapsed_sec (float): Tempo já decorrido desde o início do processo.

        Returns:
            SolveResult: FOUND com a Solution, ou NO_INCUMBENT / SOLVER_FAILURE.
        """
        if self.settings.strategy == "dinkelbach":
            result = self._solve_dinkelbach(elapsed_sec)
        else:
            result = self._solve_once(self.settings.aisle_penalty, self.get_remaining_time(elapsed_sec))

        if result.found:
            report = describe_solution(self.instance, result.solution)
            logger.info("Pedidos na wave: %d | Unidades: %d | Corredores: %d | Objetivo real: %.4f",
                        report["num_selected_orders"], report["total_units"],
                        report["num_visited_aisles"], report["objective"])
        return result

    def solve_or_raise(self, elapsed_sec: float = 0.0) -> Solution:
        """
        Igual a solve(), mas levanta SolverFailure / NoIncumbentFound quando
        não há solução.
        """
        result = self.solve(elapsed_sec)
        if result.status is SolveStatus.SOLVER_FAILURE:
            raise SolverFailure(result.message)
        if result.status is SolveStatus.NO_INCUMBENT:
            raise NoIncumbentFound(result.message)
        return result.solution
