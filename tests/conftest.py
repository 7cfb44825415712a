import pytest

from wave_picking.model import Instance


@pytest.fixture
def small_instance() -> Instance:
    """2 itens, pedido 0 com 5 unidades, pedido 1 com 10, um corredor, LB=4, UB=6."""
    return Instance.from_mappings(
        orders=[{0: 3, 1: 2}, {0: 10}],
        aisles=[{0: 5, 1: 5}],
        num_items=2,
        min_wave_size=4,
        max_wave_size=6,
    )


@pytest.fixture
def shared_aisle_instance() -> Instance:
    """O corredor 2 estoca os dois itens; os outros só um cada."""
    return Instance.from_mappings(
        orders=[{0: 4}, {1: 4}],
        aisles=[{0: 4}, {1: 4}, {0: 4, 1: 4}],
        num_items=2,
        min_wave_size=1,
        max_wave_size=8,
    )


INSTANCE_TEXT = """2 2 1
2 0 3 1 2
1 0 10
2 0 5 1 5
4 6
"""


@pytest.fixture
def instance_file(tmp_path):
    path = tmp_path / "instance_0001.txt"
    path.write_text(INSTANCE_TEXT)
    return path
