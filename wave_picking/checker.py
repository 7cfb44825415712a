# -*- coding: utf-8 -*-
# ARQUIVO: checker.py
# Verificação independente do solver: aritmética inteira exata, sem tolerâncias.

from typing import Any, Dict, List, Optional, Tuple

from .model import Instance, Solution


def _has_selection(solution: Optional[Solution]) -> bool:
    return (solution is not None
            and solution.orders is not None and solution.aisles is not None
            and len(solution.orders) > 0 and len(solution.aisles) > 0)


def _indices_in_range(instance: Instance, solution: Solution) -> bool:
    return (all(0 <= o < instance.num_orders for o in solution.orders)
            and all(0 <= a < instance.num_aisles for a in solution.aisles))


def _unit_totals(instance: Instance, solution: Solution) -> Tuple[List[int], List[int]]:
    total_units_picked = [0] * instance.num_items
    total_units_available = [0] * instance.num_items

    for order_id in solution.orders:
        for item_id, quantity in instance.orders[order_id].items.items():
            total_units_picked[item_id] += quantity

    for aisle_id in solution.aisles:
        for item_id, quantity in instance.aisles[aisle_id].inventory.items():
            total_units_available[item_id] += quantity

    return total_units_picked, total_units_available


def find_violation(instance: Instance, solution: Optional[Solution]) -> Optional[str]:
    """
    Retorna a descrição da primeira restrição violada, ou None se a solução é viável.
    """
    if not _has_selection(solution):
        return "Nenhum pedido ou nenhum corredor selecionado"
    if not _indices_in_range(instance, solution):
        return "Índice de pedido ou corredor fora da instância"

    total_units_picked, total_units_available = _unit_totals(instance, solution)

    total_units = sum(total_units_picked)
    if total_units < instance.min_wave_size or total_units > instance.max_wave_size:
        return (f"Tamanho da wave {total_units} fora do intervalo "
                f"[{instance.min_wave_size}, {instance.max_wave_size}]")

    for item_id in range(instance.num_items):
        if total_units_picked[item_id] > total_units_available[item_id]:
            return (f"Item {item_id}: demanda {total_units_picked[item_id]} > "
                    f"oferta {total_units_available[item_id]}")

    return None


def is_solution_feasible(instance: Instance, solution: Optional[Solution]) -> bool:
    """
    Decide se a solução respeita as restrições originais do problema.

    Args:
        instance (Instance): A instância do problema.
        solution (Solution): A solução candidata, vinda de qualquer fonte.

    Returns:
        bool: True se a wave está no intervalo [LB, UB] e nenhum item é
        retirado além do estoque dos corredores visitados.
    """
    return find_violation(instance, solution) is None


def compute_objective_function(instance: Instance, solution: Optional[Solution]) -> float:
    """
    Valor REAL do objetivo: unidades coletadas / corredores visitados.
    Retorna 0.0 se algum dos conjuntos estiver vazio ou tiver índices fora
    da instância.
    """
    if not _has_selection(solution) or not _indices_in_range(instance, solution):
        return 0.0

    total_units_picked = sum(instance.orders[order_id].total_units for order_id in solution.orders)
    return total_units_picked / len(solution.aisles)


def describe_solution(instance: Instance, solution: Optional[Solution]) -> Dict[str, Any]:
    """Resumo da solução para logs e relatórios."""
    violation = find_violation(instance, solution)
    selected_orders = sorted(solution.orders) if solution is not None else []
    visited_aisles = sorted(solution.aisles) if solution is not None else []
    total_units = 0
    if solution is not None and _indices_in_range(instance, solution):
        total_units = sum(instance.orders[o].total_units for o in selected_orders)
    return {
        "num_selected_orders": len(selected_orders),
        "num_visited_aisles": len(visited_aisles),
        "total_units": total_units,
        "objective": compute_objective_function(instance, solution) if violation is None else 0.0,
        "feasible": violation is None,
        "violation": violation,
    }
