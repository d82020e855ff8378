"""Shared test fixtures for brokertax."""

import csv
import io
from pathlib import Path

import pytest

from brokertax.models.report import Report
from brokertax.parsing.sections import parse_sections

STATEMENT_CSV = """\ufeffStatement,Header,Feldname,Feldwert
Statement,Data,BrokerName,Interactive Brokers Ireland Limited
Statement,Data,Period,"Januar 1, 2024 - Dezember 31, 2024"
Trades,Header,DataDiscriminator,Vermögenswertkategorie,Währung,Symbol,Datum/Zeit,Menge,T.-Kurs,Erlös,Prov./Gebühr,Code
Trades,Data,Order,STK,USD,AAPL,"2023-06-01, 10:00:00",10,10,-100,-1,O
Trades,Data,Order,STK,USD,AAPL,"2023-09-15, 10:00:00",5,12,-60,-1,O
Trades,Data,Order,STK,USD,AAPL,"2024-03-01, 15:30:00",-12,20,240,-2,C
Trades,Data,ClosedLot,STK,USD,AAPL,2023-06-01,10,10,,,
Trades,Data,ClosedLot,STK,USD,AAPL,2023-09-15,2,12,,,
Trades,SubTotal,,STK,USD,AAPL,,3,,80,-4,
Trades,Total,,STK,USD,,,,,80,-4,
Dividenden,Header,Währung,Datum,Beschreibung,Betrag
Dividenden,Data,USD,2024-05-16,AAPL(US0378331005) Bardividende USD 0.25 pro Aktie (Gewöhnliche Dividende),2.50
Dividenden,Data,USD,2023-11-16,AAPL(US0378331005) Bardividende USD 0.24 pro Aktie (Gewöhnliche Dividende),2.40
Dividenden,Data,Total,,,4.90
Quellensteuer,Header,Währung,Datum,Beschreibung,Betrag,Code
Quellensteuer,Data,USD,2024-05-16,AAPL(US0378331005) Bardividende USD 0.25 pro Aktie - US Steuer,-0.38,
Quellensteuer,Data,USD,2023-11-16,AAPL(US0378331005) Bardividende USD 0.24 pro Aktie - US Steuer,-0.36,
Quellensteuer,Data,Total,,,-0.74,
"""


def rows_of(text: str) -> list[list[str]]:
    return list(csv.reader(io.StringIO(text.lstrip("\ufeff"))))


@pytest.fixture
def statement_csv() -> str:
    return STATEMENT_CSV


@pytest.fixture
def statement_file(tmp_path: Path) -> Path:
    path = tmp_path / "statement.csv"
    path.write_bytes(STATEMENT_CSV.encode("utf-8"))
    return path


@pytest.fixture
def statement_report() -> Report:
    return parse_sections(rows_of(STATEMENT_CSV))
