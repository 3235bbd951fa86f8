"""Energy technology classification.

Source descriptors are Spanish or English free text ("Ciclo Combinado",
"Gas Natural", "combined_cycle", "geothermal"). They are mapped to one of the
fixed energy categories by an ordered rule table: rules are tried top to
bottom and the first one that matches decides. A plant described as
"planta geotérmica de vapor" is therefore geothermal, never thermal.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from mexgen.common.models import EnergyCategory

SOLAR_KEYWORDS = ("solar", "photovolta", "fotovolta")
PHOTOVOLTAIC_KEYWORDS = ("photovolta", "fotovolta")
SOLAR_THERMAL_KEYWORDS = ("thermal", "termi", "térmi")
GEOTHERMAL_KEYWORDS = ("geotherm", "geoterm", "geotérm")
WIND_KEYWORDS = ("wind", "eolic", "eólic", "viento")
HYDRO_KEYWORDS = ("hydro", "hidro", "hidrául", "hidraul", "water")
NUCLEAR_KEYWORDS = ("nuclear", "uranium", "uranio")
BIOENERGY_KEYWORDS = (
    "biomass",
    "biomasa",
    "biogas",
    "biogás",
    "bagasse",
    "bagazo",
    "black liquor",
    "licor negro",
)
BIOGAS_KEYWORDS = ("biogas", "biogás")
BAGASSE_KEYWORDS = ("bagasse", "bagazo")

THERMAL_FUEL_KEYWORDS = (
    "gas",
    "oil",
    "coal",
    "diesel",
    "diésel",
    "fuel",
    "petrol",
    "carbón",
    "carbon",
    "combustóleo",
    "combustoleo",
    "coque",
    "coke",
)
THERMAL_METHOD_KEYWORDS = (
    "combustion",
    "combustión",
    "combined cycle",
    "combined_cycle",
    "ciclo combinado",
    "ciclo_combinado",
    "steam",
    "vapor",
    "internal combustion",
    "internal_combustion",
    "combustión interna",
    "combustion interna",
    "turbine",
    "turbina",
    "thermoelectric",
    "termoeléctrica",
    "termoelectrica",
    "fluidized bed",
    "lecho fluidizado",
)

# First match wins in both tables.
THERMAL_METHOD_LABELS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("ciclo combinado", "ciclo_combinado", "combined cycle", "combined_cycle"), "combined cycle"),
    (("turbina de gas", "gas turbine", "gas_turbine"), "gas turbine"),
    (("turbina de vapor", "steam turbine", "steam_turbine"), "steam turbine"),
    (
        ("combustión interna", "combustion interna", "internal combustion", "internal_combustion"),
        "internal combustion",
    ),
    (("termoeléctrica", "termoelectrica", "thermoelectric"), "thermoelectric"),
    (("lecho fluidizado", "fluidized bed", "fluidized_bed"), "fluidized bed"),
)
THERMAL_FUEL_LABELS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("gas natural", "natural gas", "natural_gas"), "natural gas"),
    (("gas lp", "lpg"), "LP gas"),
    (("diesel", "diésel"), "diesel"),
    (("carbón", "carbon", "coal"), "coal"),
    (("combustóleo", "combustoleo", "fuel oil", "fuel_oil"), "fuel oil"),
    (("coque", "coke"), "coke"),
    (("gas",), "natural gas"),
    (("oil", "petrol"), "fuel oil"),
)
THERMAL_GENERAL = "thermal (general)"
UNSPECIFIED = "unspecified"


@dataclass(frozen=True)
class EnergyClass:
    category: EnergyCategory
    subcategory: str


@dataclass(frozen=True)
class EnergyDescriptor:
    """Lower-cased method (technology) and fuel (source) text of one plant."""

    method: str
    fuel: str
    raw_method: str = ""

    @classmethod
    def from_texts(cls, method: str | None, fuel: str | None) -> "EnergyDescriptor":
        raw_method = (method or "").strip()
        return cls(method=raw_method.lower(), fuel=(fuel or "").strip().lower(), raw_method=raw_method)

    @property
    def text(self) -> str:
        return f"{self.method} {self.fuel}"


@dataclass(frozen=True)
class EnergyRule:
    name: str
    matches: Callable[[EnergyDescriptor], bool]
    resolve: Callable[[EnergyDescriptor], EnergyClass]


def _contains_any(text: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in text for keyword in keywords)


def _first_label(text: str, table: tuple[tuple[tuple[str, ...], str], ...]) -> str | None:
    for keywords, label in table:
        if _contains_any(text, keywords):
            return label
    return None


def _solar(descriptor: EnergyDescriptor) -> EnergyClass:
    if _contains_any(descriptor.text, PHOTOVOLTAIC_KEYWORDS):
        subcategory = "photovoltaic"
    elif _contains_any(descriptor.method, SOLAR_THERMAL_KEYWORDS):
        subcategory = "solar thermal"
    else:
        subcategory = "solar (general)"
    return EnergyClass(EnergyCategory.SOLAR, subcategory)


def _bioenergy(descriptor: EnergyDescriptor) -> EnergyClass:
    if _contains_any(descriptor.text, BIOGAS_KEYWORDS):
        subcategory = "biogas"
    elif _contains_any(descriptor.text, BAGASSE_KEYWORDS):
        subcategory = "biomass (bagasse)"
    else:
        subcategory = "biomass"
    return EnergyClass(EnergyCategory.BIOENERGY, subcategory)


def _is_thermal(descriptor: EnergyDescriptor) -> bool:
    return _contains_any(descriptor.fuel, THERMAL_FUEL_KEYWORDS) or _contains_any(
        descriptor.method, THERMAL_METHOD_KEYWORDS
    )


def _thermal(descriptor: EnergyDescriptor) -> EnergyClass:
    method_label = _first_label(descriptor.method, THERMAL_METHOD_LABELS) or THERMAL_GENERAL
    fuel_label = _first_label(descriptor.fuel, THERMAL_FUEL_LABELS)
    if fuel_label is None:
        return EnergyClass(EnergyCategory.THERMAL, method_label)
    return EnergyClass(EnergyCategory.THERMAL, f"{method_label} ({fuel_label})")


def _fixed(category: EnergyCategory, subcategory: str) -> Callable[[EnergyDescriptor], EnergyClass]:
    result = EnergyClass(category, subcategory)
    return lambda _descriptor: result


def _keyword_rule(name: str, keywords: tuple[str, ...], resolve) -> EnergyRule:
    return EnergyRule(name=name, matches=lambda d: _contains_any(d.text, keywords), resolve=resolve)


ENERGY_RULES: tuple[EnergyRule, ...] = (
    _keyword_rule("solar", SOLAR_KEYWORDS, _solar),
    _keyword_rule("geothermal", GEOTHERMAL_KEYWORDS, _fixed(EnergyCategory.GEOTHERMAL, "geothermal")),
    _keyword_rule("wind", WIND_KEYWORDS, _fixed(EnergyCategory.WIND, "wind")),
    _keyword_rule("hydro", HYDRO_KEYWORDS, _fixed(EnergyCategory.HYDRO, "hydroelectric")),
    _keyword_rule("nuclear", NUCLEAR_KEYWORDS, _fixed(EnergyCategory.NUCLEAR, "nuclear")),
    _keyword_rule("bioenergy", BIOENERGY_KEYWORDS, _bioenergy),
    EnergyRule(name="thermal", matches=_is_thermal, resolve=_thermal),
)


def classify(descriptor: EnergyDescriptor, rules: tuple[EnergyRule, ...] = ENERGY_RULES) -> EnergyClass:
    for rule in rules:
        if rule.matches(descriptor):
            return rule.resolve(descriptor)
    return EnergyClass(EnergyCategory.OTHER, descriptor.raw_method or UNSPECIFIED)


def matching_rule(descriptor: EnergyDescriptor, rules: tuple[EnergyRule, ...] = ENERGY_RULES) -> str | None:
    for rule in rules:
        if rule.matches(descriptor):
            return rule.name
    return None


def classify_technology(technology: str | None, fuel: str | None) -> EnergyClass:
    """Classify a CSV row from its technology and fuel columns."""
    return classify(EnergyDescriptor.from_texts(technology, fuel))


def classify_source(source: str | None, method: str | None) -> EnergyClass:
    """Classify a catalog entry from its source and method tags."""
    return classify(EnergyDescriptor.from_texts(method, source))
