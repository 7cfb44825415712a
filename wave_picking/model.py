# -*- coding: utf-8 -*-
# ARQUIVO: model.py

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Sequence, Tuple

from .exceptions import ModelBuildError


@dataclass(frozen=True)
class Order:
    """
    Representa um único pedido.

    Attributes:
        id (int): Posição do pedido na sequência de pedidos da instância.
        items (Dict[int, int]): Dicionário mapeando ID do item para a quantidade solicitada.
    """
    id: int
    items: Dict[int, int]

    @property
    def total_units(self) -> int:
        """O número total de unidades neste pedido."""
        return sum(self.items.values())


@dataclass(frozen=True)
class Aisle:
    """
    Representa um corredor no armazém.

    Attributes:
        id (int): Posição do corredor na sequência de corredores da instância.
        inventory (Dict[int, int]): Dicionário mapeando ID do item para a quantidade disponível.
    """
    id: int
    inventory: Dict[int, int]


@dataclass(frozen=True)
class Instance:
    """
    Armazena todos os dados de uma instância do problema.

    A instância é construída uma única vez e só é lida depois disso, por
    isso é imutável. As invariantes são verificadas na construção e uma
    violação levanta ModelBuildError.
    """
    orders: Tuple[Order, ...]
    aisles: Tuple[Aisle, ...]
    num_items: int
    min_wave_size: int
    max_wave_size: int

    def __post_init__(self):
        # Aceita listas na construção, mas guarda tuplas.
        object.__setattr__(self, "orders", tuple(self.orders))
        object.__setattr__(self, "aisles", tuple(self.aisles))
        self.validate()

    @classmethod
    def from_mappings(cls, orders: Sequence[Mapping[int, int]], aisles: Sequence[Mapping[int, int]],
                      num_items: int, min_wave_size: int, max_wave_size: int) -> "Instance":
        """
        Constrói a instância a partir de sequências de dicionários item -> quantidade.
        O índice de cada pedido/corredor é a sua posição na sequência.
        """
        return cls(
            orders=tuple(Order(id=o, items=dict(items)) for o, items in enumerate(orders)),
            aisles=tuple(Aisle(id=a, inventory=dict(inventory)) for a, inventory in enumerate(aisles)),
            num_items=num_items,
            min_wave_size=min_wave_size,
            max_wave_size=max_wave_size,
        )

    @property
    def num_orders(self) -> int:
        return len(self.orders)

    @property
    def num_aisles(self) -> int:
        return len(self.aisles)

    def validate(self):
        if not _is_non_negative_int(self.num_items):
            raise ModelBuildError(f"num_items inválido: {self.num_items!r}")
        if not _is_non_negative_int(self.min_wave_size) or not _is_non_negative_int(self.max_wave_size):
            raise ModelBuildError(
                f"Limites da wave inválidos: LB={self.min_wave_size!r}, UB={self.max_wave_size!r}")
        if self.min_wave_size > self.max_wave_size:
            raise ModelBuildError(
                f"LB={self.min_wave_size} maior que UB={self.max_wave_size}")

        for position, order in enumerate(self.orders):
            if order.id != position:
                raise ModelBuildError(f"Pedido na posição {position} tem id {order.id}")
            self._check_quantities(order.items, f"pedido {order.id}")

        for position, aisle in enumerate(self.aisles):
            if aisle.id != position:
                raise ModelBuildError(f"Corredor na posição {position} tem id {aisle.id}")
            self._check_quantities(aisle.inventory, f"corredor {aisle.id}")

    def _check_quantities(self, quantities: Mapping[int, int], owner: str):
        for item_id, quantity in quantities.items():
            if not isinstance(item_id, int) or not 0 <= item_id < self.num_items:
                raise ModelBuildError(
                    f"Item {item_id!r} do {owner} fora do intervalo [0, {self.num_items})")
            if not _is_non_negative_int(quantity):
                raise ModelBuildError(
                    f"Quantidade inválida {quantity!r} para o item {item_id} do {owner}")

    def item_locations(self) -> Dict[int, List[int]]:
        """
        Mapeamento reverso de itens para os corredores que os estocam.
        """
        locations: Dict[int, List[int]] = {}
        for aisle in self.aisles:
            for item_id in aisle.inventory:
                locations.setdefault(item_id, []).append(aisle.id)
        return locations

    def orders_by_item(self) -> Dict[int, List[int]]:
        """
        Mapeamento reverso de itens para os pedidos que os contêm.
        """
        by_item: Dict[int, List[int]] = {}
        for order in self.orders:
            for item_id in order.items:
                by_item.setdefault(item_id, []).append(order.id)
        return by_item


def _is_non_negative_int(value) -> bool:
    # bool é subclasse de int, mas não é uma quantidade.
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


@dataclass(frozen=True)
class Solution:
    """
    Conjunto de pedidos selecionados e conjunto de corredores visitados.
    Ambos podem estar vazios.
    """
    orders: FrozenSet[int] = field(default_factory=frozenset)
    aisles: FrozenSet[int] = field(default_factory=frozenset)

    @classmethod
    def of(cls, orders: Iterable[int], aisles: Iterable[int]) -> "Solution":
        return cls(orders=frozenset(orders), aisles=frozenset(aisles))

    def is_empty(self) -> bool:
        return not self.orders and not self.aisles


class SolveStatus(Enum):
    FOUND = "found"
    NO_INCUMBENT = "no_incumbent"
    SOLVER_FAILURE = "solver_failure"


@dataclass(frozen=True)
class SolveResult:
    """
    Resultado explícito de uma resolução.

    `solution` só existe quando `status` é FOUND. "Nenhuma solução produzida"
    é um status próprio e nunca é representado por uma Solution vazia.
    """
    status: SolveStatus
    solution: Optional[Solution] = None
    surrogate_objective: Optional[float] = None
    message: str = ""

    @property
    def found(self) -> bool:
        return self.status is SolveStatus.FOUND

    @classmethod
    def found_with(cls, solution: Solution, surrogate_objective: Optional[float] = None) -> "SolveResult":
        return cls(SolveStatus.FOUND, solution, surrogate_objective)

    @classmethod
    def no_incumbent(cls, message: str = "") -> "SolveResult":
        return cls(SolveStatus.NO_INCUMBENT, message=message)

    @classmethod
    def failure(cls, message: str) -> "SolveResult":
        return cls(SolveStatus.SOLVER_FAILURE, message=message)
