# aquafarm/infrastructure/catalog/fish_type_catalog.py
# Catálogo de parâmetros por espécie, carregado de documentos simples
# (mesmo formato do armazenamento de dados de referência).

from __future__ import annotations

from typing import Any, Dict, Iterator, Mapping

from aquafarm.domain.entities.fish_type import FishTypeParameters
from aquafarm.domain.errors import FishTypeNotFoundError

# =========================
# Documento padrão: tilápia-do-nilo
# Valores ilustrativos para testes e demonstração, não calibrados em campo.
# Temperatura ótima 28 °C e FCR ~1.5 seguem a referência usual da espécie;
# O2 3/4 mg/L e pH mínimo 6.5 seguem os limiares operacionais de monitoramento.
# Matriz de alimentação, regras de refeições, NH3, NO2 e sobrevivência são
# padrões ilustrativos: substitua pelo catálogo de referência da fazenda.
# =========================
NILE_TILAPIA: Dict[str, Any] = {
    "doMin": 3.0,
    "doSafe": 5.0,
    "phMin": 6.5,
    "phMax": 9.0,
    "nh3Safe": 0.02,
    "nh3Critical": 0.1,
    "no2Max": 0.5,
    "tempMin": 20.0,
    "tempMax": 35.0,
    "tempOptimal": 28.0,
    "fcrMin": 1.2,
    "fcrMax": 1.8,
    "survivalRate": 90.0,
    "feedingRateMatrix": {
        "weight_ranges": [
            {"min": 0.0,    "max": 5.0},
            {"min": 5.01,   "max": 20.0},
            {"min": 20.01,  "max": 50.0},
            {"min": 50.01,  "max": 150.0},
            {"min": 150.01, "max": 300.0},
            {"min": 300.01, "max": 1000.0},
        ],
        "temperatures": [24.0, 26.0, 28.0, 30.0, 32.0],
        "rates": [
            [8.0, 10.0, 12.0, 11.0, 9.0],
            [5.0, 6.0,  7.0,  6.5,  5.5],
            [3.5, 4.0,  4.5,  4.2,  3.8],
            [2.5, 3.0,  3.2,  3.0,  2.6],
            [1.8, 2.0,  2.2,  2.1,  1.8],
            [1.2, 1.4,  1.5,  1.4,  1.2],
        ],
    },
    "mealFrequencyRules": [
        {"maxWeight": 5.0,   "mealsPerDay": 6},
        {"maxWeight": 20.0,  "mealsPerDay": 4},
        {"maxWeight": 150.0, "mealsPerDay": 3},
        {"maxWeight": None,  "mealsPerDay": 2},
    ],
}

DEFAULT_DOCUMENTS: Dict[str, Dict[str, Any]] = {
    "tilapia": NILE_TILAPIA,
}


class FishTypeCatalog(Mapping[str, FishTypeParameters]):
    """
    Catálogo somente leitura fish_type_id -> FishTypeParameters.

    Comporta-se como um dict (pode ser passado direto aos consolidados de
    ração); `get_parameters` levanta FishTypeNotFoundError para espécie ausente.
    """

    def __init__(self, parameters: Mapping[str, FishTypeParameters]) -> None:
        self._parameters: Dict[str, FishTypeParameters] = dict(parameters)

    @classmethod
    def from_documents(cls, documents: Mapping[str, Dict[str, Any]]) -> "FishTypeCatalog":
        return cls({k: FishTypeParameters.from_dict(doc) for k, doc in documents.items()})

    @classmethod
    def default(cls) -> "FishTypeCatalog":
        return cls.from_documents(DEFAULT_DOCUMENTS)

    def get_parameters(self, fish_type_id: str) -> FishTypeParameters:
        try:
            return self._parameters[fish_type_id]
        except KeyError as e:
            raise FishTypeNotFoundError(f"Parâmetros da espécie não encontrados: {fish_type_id}") from e

    def __getitem__(self, fish_type_id: str) -> FishTypeParameters:
        return self._parameters[fish_type_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._parameters)

    def __len__(self) -> int:
        return len(self._parameters)
