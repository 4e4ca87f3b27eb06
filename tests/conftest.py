import pytest

ATTENDANCE_JANUARY = """2024/01/01 - 2024/01/31
;08h;;09h;;Total;
Vendedor;At.;Pot.;At.;Pot.;At.;Pot.
1-7 Ana (FUNCIONARIO);5;1;3;0;8;1
Bruno;2;;4;2;6;2
Total;7;1;7;2;14;3
"""

ATTENDANCE_FEBRUARY = """01/02/2024 - 29/02/2024
;08h;;10h;
Vendedor;At.;Pot.;At.;Pot.
Ana;3;2;1;1
Dan;6;0;4;0
"""

SALES_JANUARY = """Vendedor;Loja;Vendas;Pecas;Clientes;Devol.;PA;Desc.;Total Vendas;Meta;Bilhete Medio
1-7 Ana (FUNCIONARIO);L1;4;6;4;0;1,5;0;"1.000,00";0;"250,00"
Carol;L1;10;15;9;0;1.5;0;"1.234,56";0;"61,73"
Total;L1;14;21;13;0;1,5;0;"2.234,56";0;"159,61"
linha;curta
"""

SALES_FEBRUARY = """Vendedor;Loja;Vendas;Pecas;Clientes;Devol.;PA;Desc.;Total Vendas;Meta;Bilhete Medio
Ana;L1;6;12;6;0;2,0;0;"500,00";0;"83,33"
"""


@pytest.fixture
def attendance_january():
    return ATTENDANCE_JANUARY


@pytest.fixture
def attendance_february():
    return ATTENDANCE_FEBRUARY


@pytest.fixture
def sales_january():
    return SALES_JANUARY


@pytest.fixture
def sales_february():
    return SALES_FEBRUARY
