"""Static Brazilian regional reference data for geotargeting.

State codes, principal cities and metropolitan centres. Pure lookups over
in-module tables; extend the tables as new markets open.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from geotargeting.models.targeting import Coordinate


@dataclass(frozen=True)
class State:
    code: str
    name: str


@dataclass(frozen=True)
class City:
    name: str
    state_code: str

    @property
    def key(self) -> str:
        """The "City, StateCode" form used by city-list targeting."""
        return f"{self.name}, {self.state_code}"


_STATES: Tuple[State, ...] = (
    State("AC", "Acre"),
    State("AL", "Alagoas"),
    State("AP", "Amapá"),
    State("AM", "Amazonas"),
    State("BA", "Bahia"),
    State("CE", "Ceará"),
    State("DF", "Distrito Federal"),
    State("ES", "Espírito Santo"),
    State("GO", "Goiás"),
    State("MA", "Maranhão"),
    State("MT", "Mato Grosso"),
    State("MS", "Mato Grosso do Sul"),
    State("MG", "Minas Gerais"),
    State("PA", "Pará"),
    State("PB", "Paraíba"),
    State("PR", "Paraná"),
    State("PE", "Pernambuco"),
    State("PI", "Piauí"),
    State("RJ", "Rio de Janeiro"),
    State("RN", "Rio Grande do Norte"),
    State("RS", "Rio Grande do Sul"),
    State("RO", "Rondônia"),
    State("RR", "Roraima"),
    State("SC", "Santa Catarina"),
    State("SP", "São Paulo"),
    State("SE", "Sergipe"),
    State("TO", "Tocantins"),
)

_STATE_BY_NAME: Dict[str, str] = {s.name.lower(): s.code for s in _STATES}

_PRINCIPAL_CITIES: Tuple[City, ...] = (
    City("São Paulo", "SP"),
    City("Rio de Janeiro", "RJ"),
    City("Brasília", "DF"),
    City("Salvador", "BA"),
    City("Fortaleza", "CE"),
    City("Belo Horizonte", "MG"),
    City("Manaus", "AM"),
    City("Curitiba", "PR"),
    City("Recife", "PE"),
    City("Porto Alegre", "RS"),
    City("Goiânia", "GO"),
    City("Belém", "PA"),
    City("Guarulhos", "SP"),
    City("Campinas", "SP"),
    City("São Luís", "MA"),
    City("São Gonçalo", "RJ"),
    City("Maceió", "AL"),
    City("Duque de Caxias", "RJ"),
    City("Natal", "RN"),
    City("Teresina", "PI"),
)

# Known metropolitan centres used by the density heuristic
METRO_CENTERS: Tuple[Tuple[str, Coordinate], ...] = (
    ("São Paulo", Coordinate(-23.5505, -46.6333)),
    ("Rio de Janeiro", Coordinate(-22.9068, -43.1729)),
    ("Belo Horizonte", Coordinate(-19.9167, -43.9345)),
    ("Porto Alegre", Coordinate(-30.0346, -51.2177)),
    ("Curitiba", Coordinate(-25.4284, -49.2733)),
)


def list_states() -> List[State]:
    """Return all Brazilian states in table order."""
    return list(_STATES)


def state_code_for(name_or_code: str) -> Optional[str]:
    """Resolve a state name or code (case-insensitive) to its two-letter code."""
    value = name_or_code.strip()
    if not value:
        return None
    upper = value.upper()
    if any(s.code == upper for s in _STATES):
        return upper
    return _STATE_BY_NAME.get(value.lower())


def search_cities(query: str) -> List[City]:
    """Case-insensitive substring search over city names and state codes."""
    needle = query.strip().lower()
    if not needle:
        return []
    return [
        city for city in _PRINCIPAL_CITIES
        if needle in city.name.lower() or needle in city.state_code.lower()
    ]
