# -*- coding: utf-8 -*-
# ARQUIVO: data_parser.py

import logging
from typing import Dict, List, Sequence

from .model import Aisle, Instance, Order, Solution

logger = logging.getLogger(__name__)


def _read_lines(file_path: str) -> List[str]:
    with open(file_path, 'r') as f:
        # Linhas em branco no fim do arquivo não fazem parte do formato.
        return [line for line in f.readlines() if line.strip()]


def _parse_ints(line: str, line_number: int) -> List[int]:
    try:
        return list(map(int, line.strip().split()))
    except ValueError as e:
        raise ValueError(f"Linha {line_number} contém valores não inteiros. Detalhes: {e}")


def _parse_pairs(parts: List[int], line_number: int, what: str) -> Dict[int, int]:
    """Lê uma linha no formato `k item_1 qtd_1 ... item_k qtd_k`."""
    if not parts:
        raise ValueError(f"Linha {line_number} vazia ao ler {what}.")
    k, data = parts[0], parts[1:]
    if len(data) != 2 * k:
        raise ValueError(f"Formato incorreto para {what} na linha {line_number}.")
    return {data[2 * i]: data[2 * i + 1] for i in range(k)}


class InstanceParser:
    """
    Responsável por ler um arquivo de instância e carregar seus dados
    em um objeto `Instance`.
    """
    @staticmethod
    def parse(file_path: str) -> Instance:
        """
        Lê um arquivo de instância e retorna um objeto Instance populado.

        Raises:
            FileNotFoundError: Se o caminho do arquivo não for encontrado.
            ValueError: Se o arquivo tiver um formato inesperado.
        """
        logger.info("Iniciando o parsing do arquivo: %s", file_path)
        return InstanceParser.parse_lines(_read_lines(file_path))

    @staticmethod
    def parse_lines(lines: Sequence[str]) -> Instance:
        if not lines:
            raise ValueError("Arquivo de instância vazio.")

        # 1. Cabeçalho
        header = _parse_ints(lines[0], 1)
        if len(header) != 3:
            raise ValueError(f"Cabeçalho deve ter 3 valores, encontrados {len(header)}.")
        num_orders, num_items, num_aisles = header
        logger.info("Cabeçalho lido: %d pedidos, %d itens, %d corredores.", num_orders, num_items, num_aisles)

        expected_lines = 1 + num_orders + num_aisles + 1
        if len(lines) < expected_lines:
            raise ValueError(
                f"Arquivo terminou inesperadamente: esperadas {expected_lines} linhas, encontradas {len(lines)}.")

        current_line_index = 1

        # 2. Pedidos
        orders: List[Order] = []
        for order_id in range(num_orders):
            parts = _parse_ints(lines[current_line_index], current_line_index + 1)
            items = _parse_pairs(parts, current_line_index + 1, f"o pedido {order_id}")
            orders.append(Order(id=order_id, items=items))
            current_line_index += 1
        logger.info("%d pedidos lidos com sucesso.", len(orders))

        # 3. Corredores
        aisles: List[Aisle] = []
        for aisle_id in range(num_aisles):
            parts = _parse_ints(lines[current_line_index], current_line_index + 1)
            inventory = _parse_pairs(parts, current_line_index + 1, f"o corredor {aisle_id}")
            aisles.append(Aisle(id=aisle_id, inventory=inventory))
            current_line_index += 1
        logger.info("%d corredores lidos com sucesso.", len(aisles))

        # 4. Limites da wave
        limits = _parse_ints(lines[current_line_index], current_line_index + 1)
        if len(limits) != 2:
            raise ValueError(
                f"A linha {current_line_index + 1} não tem o formato de limites (LB UB).")
        min_wave_size, max_wave_size = limits
        logger.info("Limites da wave lidos: LB=%d, UB=%d.", min_wave_size, max_wave_size)

        return Instance(
            orders=tuple(orders),
            aisles=tuple(aisles),
            num_items=num_items,
            min_wave_size=min_wave_size,
            max_wave_size=max_wave_size,
        )


class SolutionParser:
    """
    Lê um arquivo de solução no formato do desafio: quantidade de pedidos,
    um índice por linha, quantidade de corredores, um índice por linha.
    """
    @staticmethod
    def parse(file_path: str) -> Solution:
        return SolutionParser.parse_lines(_read_lines(file_path))

    @staticmethod
    def parse_lines(lines: Sequence[str]) -> Solution:
        values = [_parse_ints(line, i + 1) for i, line in enumerate(lines)]
        if any(len(v) != 1 for v in values):
            raise ValueError("Cada linha do arquivo de solução deve conter um único inteiro.")
        flat = [v[0] for v in values]

        if not flat:
            raise ValueError("Arquivo de solução vazio.")
        num_orders = flat[0]
        orders = flat[1:1 + num_orders]
        if len(orders) != num_orders or len(flat) < num_orders + 2:
            raise ValueError("Arquivo de solução terminou antes da lista de corredores.")

        num_aisles = flat[1 + num_orders]
        aisles = flat[2 + num_orders:]
        if len(aisles) != num_aisles:
            raise ValueError(
                f"Esperados {num_aisles} corredores no arquivo de solução, encontrados {len(aisles)}.")

        return Solution.of(orders, aisles)


def write_solution_file(solution: Solution, output_path: str):
    """
    Escreve a solução no formato especificado pelo desafio.
    """
    logger.info("Salvando solução em '%s'...", output_path)
    with open(output_path, 'w') as f:
        # Primeira linha: número de pedidos na wave
        f.write(f"{len(solution.orders)}\n")
        for order_id in sorted(solution.orders):
            f.write(f"{order_id}\n")
        # Linha seguinte: número de corredores visitados
        f.write(f"{len(solution.aisles)}\n")
        for aisle_id in sorted(solution.aisles):
            f.write(f"{aisle_id}\n")
    logger.info("Arquivo de solução salvo com sucesso.")
