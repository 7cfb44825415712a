from types import SimpleNamespace

import gurobipy as gp
import pytest
from gurobipy import GRB

from wave_picking.checker import compute_objective_function, is_solution_feasible
from wave_picking.config import SolverSettings
from wave_picking.exceptions import NoIncumbentFound, SolverFailure
from wave_picking.model import Instance, Solution, SolveStatus
from wave_picking.solver import WaveSolver


def _settings(**kwargs):
    kwargs.setdefault("max_runtime_sec", 30)
    return SolverSettings(**kwargs)


@pytest.mark.parametrize("elapsed, expected", [
    (0.0, 600),
    (0.4, 599),
    (599.5, 0),
    (600.0, 0),
    (750.0, 0),
])
def test_remaining_time_is_floored_at_zero(small_instance, elapsed, expected):
    assert WaveSolver(small_instance).get_remaining_time(elapsed) == expected


def test_solves_small_instance(small_instance):
    result = WaveSolver(small_instance, _settings()).solve()

    assert result.found
    assert result.solution == Solution.of({0}, {0})
    assert result.surrogate_objective == pytest.approx(5 - 1000)
    assert is_solution_feasible(small_instance, result.solution)
    assert compute_objective_function(small_instance, result.solution) == 5.0


def test_penalty_prefers_fewer_aisles(shared_aisle_instance):
    result = WaveSolver(shared_aisle_instance, _settings()).solve()

    assert result.solution == Solution.of({0, 1}, {2})
    assert compute_objective_function(shared_aisle_instance, result.solution) == 8.0


def test_dinkelbach_reaches_best_ratio(shared_aisle_instance):
    result = WaveSolver(shared_aisle_instance, _settings(strategy="dinkelbach")).solve()

    assert result.found
    assert is_solution_feasible(shared_aisle_instance, result.solution)
    assert compute_objective_function(shared_aisle_instance, result.solution) == 8.0


def test_solve_does_not_touch_instance(small_instance):
    before = Instance.from_mappings([{0: 3, 1: 2}, {0: 10}], [{0: 5, 1: 5}], 2, 4, 6)
    WaveSolver(small_instance, _settings()).solve()
    assert small_instance == before


def test_infeasible_instance_has_no_solution(small_instance):
    instance = Instance.from_mappings(
        [{0: 3, 1: 2}, {0: 10}], [{0: 5, 1: 5}], 2, min_wave_size=20, max_wave_size=30)
    solver = WaveSolver(instance, _settings())

    result = solver.solve()
    assert result.status is SolveStatus.NO_INCUMBENT
    assert result.solution is None

    with pytest.raises(NoIncumbentFound):
        solver.solve_or_raise()


def test_dinkelbach_infeasible_instance_has_no_solution():
    instance = Instance.from_mappings([{0: 3}], [{0: 1}], 1, 1, 5)
    result = WaveSolver(instance, _settings(strategy="dinkelbach")).solve()
    assert result.status is SolveStatus.NO_INCUMBENT


def test_no_aisles_means_no_solution():
    instance = Instance.from_mappings([{0: 1}], [], 1, 0, 5)
    result = WaveSolver(instance, _settings()).solve()
    assert not result.found
    assert result.solution is None


def test_gurobi_errors_become_solver_failure(small_instance, monkeypatch):
    def broken_build(self, model, aisle_penalty):
        raise gp.GurobiError(10009, "licença indisponível")

    monkeypatch.setattr(WaveSolver, "_build_model", broken_build)
    solver = WaveSolver(small_instance, _settings())

    result = solver.solve()
    assert result.status is SolveStatus.SOLVER_FAILURE
    assert result.solution is None

    with pytest.raises(SolverFailure):
        solver.solve_or_raise()


def _fake_model(values_x, values_y, sol_count=1):
    model = SimpleNamespace(Status=GRB.TIME_LIMIT, SolCount=sol_count, ObjVal=-990.0)
    x = {i: SimpleNamespace(X=v) for i, v in enumerate(values_x)}
    y = {i: SimpleNamespace(X=v) for i, v in enumerate(values_y)}
    return model, x, y


def test_extraction_uses_selection_threshold(small_instance):
    model, x, y = _fake_model([0.95, 0.9], [1.0000001])
    result = WaveSolver(small_instance)._extract_solution(model, x, y)
    assert result.solution == Solution.of({0}, {0})

    relaxed = WaveSolver(small_instance, SolverSettings(selection_threshold=0.5))
    assert relaxed._extract_solution(model, x, y).solution == Solution.of({0, 1}, {0})


def test_extraction_without_incumbent(small_instance):
    model, x, y = _fake_model([1.0], [1.0], sol_count=0)
    result = WaveSolver(small_instance)._extract_solution(model, x, y)
    assert result.status is SolveStatus.NO_INCUMBENT


def test_expired_budget_still_attempts_a_solve(small_instance, monkeypatch):
    limits = []
    original = WaveSolver._solve_once

    def recording_solve_once(self, aisle_penalty, time_limit):
        limits.append(time_limit)
        return original(self, aisle_penalty, time_limit)

    monkeypatch.setattr(WaveSolver, "_solve_once", recording_solve_once)
    result = WaveSolver(small_instance, _settings()).solve(elapsed_sec=1000)

    assert limits == [0]
    assert result.status in (SolveStatus.FOUND, SolveStatus.NO_INCUMBENT)


def test_dinkelbach_with_expired_budget_runs_one_iteration(small_instance, monkeypatch):
    limits = []
    original = WaveSolver._solve_once

    def recording_solve_once(self, aisle_penalty, time_limit):
        limits.append(time_limit)
        return original(self, aisle_penalty, time_limit)

    monkeypatch.setattr(WaveSolver, "_solve_once", recording_solve_once)
    result = WaveSolver(small_instance, _settings(strategy="dinkelbach")).solve(elapsed_sec=1000)

    assert limits == [0]
    assert result.status in (SolveStatus.FOUND, SolveStatus.NO_INCUMBENT)


def test_no_orders_yields_empty_wave_that_the_checker_rejects():
    instance = Instance.from_mappings([], [{0: 5}], 1, 0, 5)
    result = WaveSolver(instance, _settings()).solve()

    assert result.found
    assert result.solution == Solution.of(set(), {0})
    assert not is_solution_feasible(instance, result.solution)
    assert compute_objective_function(instance, result.solution) == 0.0


def test_infeasible_model_writes_iis(tmp_path):
    instance = Instance.from_mappings([{0: 3}], [{0: 1}], 1, 1, 5)
    iis_path = tmp_path / "model_iis.ilp"

    result = WaveSolver(instance, _settings(iis_path=str(iis_path))).solve()

    assert result.status is SolveStatus.NO_INCUMBENT
    assert iis_path.exists()


def test_iis_errors_keep_no_incumbent(small_instance):
    def broken_iis():
        raise gp.GurobiError(10013, "não foi possível abrir o arquivo")

    model, x, y = _fake_model([0.0], [0.0], sol_count=0)
    model.Status = GRB.INFEASIBLE
    model.computeIIS = broken_iis
    model.write = lambda path: None

    solver = WaveSolver(small_instance, SolverSettings(iis_path="/nao/existe/model_iis.ilp"))
    result = solver._extract_solution(model, x, y)

    assert result.status is SolveStatus.NO_INCUMBENT
    assert result.solution is None
