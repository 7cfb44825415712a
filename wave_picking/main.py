# -*- coding: utf-8 -*-
# ARQUIVO: main.py

import argparse
import logging
import sys
from typing import List, Optional

from .checker import describe_solution
from .config import STRATEGIES, SolverSettings
from .data_parser import InstanceParser, write_solution_file
from .exceptions import ModelBuildError
from .solver import WaveSolver
from .timer import Stopwatch

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NO_SOLUTION = 1
EXIT_USAGE = 2


def configure_logging(log_file: Optional[str] = "wave_picking.log", level: int = logging.INFO):
    """
    Configura o logger principal: arquivo de log mais um handler de console.
    """
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        filename=log_file,
        filemode='w',
    )
    if log_file is not None:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter('%(asctime)s - %(message)s'))
        logging.getLogger().addHandler(console_handler)


def run_challenge(input_file: str, output_file: str, settings: SolverSettings,
                  stopwatch: Optional[Stopwatch] = None) -> int:
    """
    Orquestra a execução do desafio.

    1. Faz o parsing da instância.
    2. Cria e resolve o modelo de otimização.
    3. Valida e salva a solução.
    """
    stopwatch = stopwatch if stopwatch is not None else Stopwatch().start()
    logger.info("--- INICIANDO DESAFIO DE OTIMIZAÇÃO DE WAVE ---")
    try:
        instance = InstanceParser.parse(input_file)
        solver = WaveSolver(instance, settings)
        result = solver.solve(stopwatch.elapsed())

        if not result.found:
            logger.warning("Nenhuma solução produzida: %s", result.message)
            return EXIT_NO_SOLUTION

        report = describe_solution(instance, result.solution)
        if report["feasible"]:
            logger.info("Solução VIÁVEL. Valor da Função Objetivo (Densidade): %.4f", report["objective"])
        else:
            logger.warning("A solução retornada é INVIÁVEL: %s", report["violation"])

        write_solution_file(result.solution, output_file)
        return EXIT_OK

    except (FileNotFoundError, ValueError) as e:
        logger.error("ERRO DE ARQUIVO/DADOS: %s", e)
        return EXIT_USAGE
    except ModelBuildError as e:
        logger.error("INSTÂNCIA INVÁLIDA: %s", e)
        return EXIT_USAGE
    finally:
        logger.info("--- EXECUÇÃO FINALIZADA (%.2fs) ---", stopwatch.elapsed())


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wave-picking",
        description="Seleciona pedidos e corredores de uma wave maximizando unidades por corredor.")
    parser.add_argument("input_file", help="Arquivo .txt da instância.")
    parser.add_argument("output_file", help="Arquivo onde a solução será salva.")
    parser.add_argument("time_limit_sec", type=int, nargs="?", default=None,
                        help="Orçamento total de tempo em segundos (padrão: 600).")
    parser.add_argument("--strategy", choices=STRATEGIES, default=None,
                        help="penalty (padrão) ou dinkelbach.")
    parser.add_argument("--verbose", action="store_true", help="Mostra o log do Gurobi.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    stopwatch = Stopwatch().start()
    args = build_arg_parser().parse_args(argv)

    overrides = {}
    if args.time_limit_sec is not None:
        overrides["max_runtime_sec"] = args.time_limit_sec
    if args.strategy is not None:
        overrides["strategy"] = args.strategy
    if args.verbose:
        overrides["verbose"] = True

    try:
        settings = SolverSettings.from_env(**overrides)
    except ValueError as e:
        print(f"Configuração inválida: {e}")
        return EXIT_USAGE

    configure_logging()
    return run_challenge(args.input_file, args.output_file, settings, stopwatch)


if __name__ == '__main__':
    sys.exit(main())
