import pytest

from mexgen.classify.ownership import (
    ClassificationPattern,
    FieldSectorStrategy,
    PatternSectorStrategy,
    PatternSet,
)
from mexgen.common.models import Sector


def test_unmatched_operator_defaults_differ_between_strategies():
    assert PatternSectorStrategy().classify("Desconocido S.A.", "Desconocido S.A.") is Sector.PRIVATE
    assert FieldSectorStrategy().classify("Desconocido S.A.", "") is Sector.UNDETERMINED


@pytest.mark.parametrize(
    ("operator", "owner", "expected"),
    [
        ("Comisión Federal de Electricidad", "", Sector.PUBLIC),
        ("CFE", "CFE", Sector.PUBLIC),
        ("Pemex Transformación Industrial", "", Sector.PUBLIC),
        ("Iberdrola", "Iberdrola", Sector.PRIVATE),
        ("", "", Sector.UNDETERMINED),
        ("  ", "N/D", Sector.UNDETERMINED),
        ("nd", "nd", Sector.UNDETERMINED),
        ("Unknown", "", Sector.UNDETERMINED),
    ],
)
def test_pattern_strategy(operator, owner, expected):
    assert PatternSectorStrategy().classify(operator, owner) is expected


def test_pattern_strategy_uses_given_snapshot():
    patterns = PatternSet.of([ClassificationPattern("iberdrola", Sector.PUBLIC)])
    strategy = PatternSectorStrategy(patterns)
    assert strategy.classify("Iberdrola", "") is Sector.PUBLIC
    assert strategy.classify("CFE", "") is Sector.PRIVATE


def test_empty_pattern_set_classifies_everything_private():
    strategy = PatternSectorStrategy(PatternSet.of([]))
    assert strategy.classify("CFE", "") is Sector.PRIVATE


@pytest.mark.parametrize(
    ("operator", "owner", "sector_field", "expected"),
    [
        ("Iberdrola", "", "Privado", Sector.PRIVATE),
        ("Alguien", "", "Público", Sector.PUBLIC),
        ("Alguien", "", "publico", Sector.PUBLIC),
        ("CFE", "", "", Sector.PUBLIC),
        ("Gobierno del Estado", "", "", Sector.PUBLIC),
        ("Enel Green Power", "", "", Sector.PRIVATE),
        ("Empresa S.A. de C.V.", "", "", Sector.UNDETERMINED),
        ("Termoeléctrica de Mexicali", "Sempra Infraestructura", "", Sector.UNDETERMINED),
    ],
)
def test_field_strategy(operator, owner, sector_field, expected):
    assert FieldSectorStrategy().classify(operator, owner, sector_field) is expected


def test_declared_sector_wins_over_keywords():
    assert FieldSectorStrategy().classify("CFE", "", "Privado") is Sector.PRIVATE
