"""
Parâmetros de referência por espécie.

Dados estáticos fornecidos por um catálogo externo e tratados como somente
leitura pelo núcleo: limiares de qualidade da água, faixa de FCR, matriz de
taxa de alimentação (faixa de peso × temperatura) e regras de frequência de
refeições.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from aquafarm.domain.errors import ValidationError


@dataclass(frozen=True)
class WeightRange:
    """Faixa de peso individual em gramas, inclusiva nas duas pontas."""
    min: float
    max: float

    def __post_init__(self) -> None:
        if self.min > self.max:
            raise ValidationError(f"Faixa de peso inválida: {self.min} > {self.max}")


@dataclass(frozen=True)
class FeedingRateMatrix:
    """
    Grade de taxa base de alimentação (% da biomassa por dia).

    Attributes:
        weight_ranges: Faixas de peso em ordem crescente.
        temperatures: Temperaturas de referência (°C) de cada coluna.
        rates: rates[i][j] = taxa para a faixa i na temperatura j.
    """
    weight_ranges: Tuple[WeightRange, ...]
    temperatures: Tuple[float, ...]
    rates: Tuple[Tuple[float, ...], ...]

    def __post_init__(self) -> None:
        # aceita listas na construção, guarda tuplas
        object.__setattr__(self, "weight_ranges", tuple(self.weight_ranges))
        object.__setattr__(self, "temperatures", tuple(float(t) for t in self.temperatures))
        object.__setattr__(self, "rates", tuple(tuple(float(r) for r in row) for row in self.rates))

        if not self.weight_ranges:
            raise ValidationError("Matriz de alimentação sem faixas de peso.")
        if not self.temperatures:
            raise ValidationError("Matriz de alimentação sem temperaturas de referência.")
        if len(self.rates) != len(self.weight_ranges):
            raise ValidationError(
                f"Matriz com {len(self.rates)} linhas para {len(self.weight_ranges)} faixas de peso."
            )
        for i, row in enumerate(self.rates):
            if len(row) != len(self.temperatures):
                raise ValidationError(
                    f"Linha {i} com {len(row)} taxas para {len(self.temperatures)} temperaturas."
                )


@dataclass(frozen=True)
class MealFrequencyRule:
    """`max_weight=None` significa "qualquer peso acima"."""
    max_weight: Optional[float]
    meals_per_day: int

    def __post_init__(self) -> None:
        if self.meals_per_day < 1:
            raise ValidationError(f"Refeições por dia deve ser >= 1: {self.meals_per_day}")

    def applies_to(self, weight_g: float) -> bool:
        return self.max_weight is None or weight_g <= self.max_weight


@dataclass(frozen=True)
class FishTypeParameters:
    """
    Constantes de referência de uma espécie.

    Attributes:
        do_min: O2 dissolvido mínimo (mg/L); abaixo disso a alimentação para.
        do_safe: O2 dissolvido seguro (mg/L).
        ph_min / ph_max: Faixa tolerada de pH.
        nh3_safe / nh3_critical: Limiares de amônia tóxica (mg/L).
        no2_max: Nitrito máximo (mg/L).
        temp_min / temp_max / temp_optimal: Temperaturas (°C).
        fcr_min / fcr_max: Faixa de conversão alimentar esperada.
        survival_rate: Sobrevivência padrão (%).
        feeding_rate_matrix: Taxa base por peso × temperatura.
        meal_frequency_rules: Regras ordenadas de refeições por dia.
    """
    do_min: float
    do_safe: float
    ph_min: float
    ph_max: float
    nh3_safe: float
    nh3_critical: float
    no2_max: float
    temp_min: float
    temp_max: float
    temp_optimal: float
    fcr_min: float
    fcr_max: float
    survival_rate: float
    feeding_rate_matrix: FeedingRateMatrix
    meal_frequency_rules: Tuple[MealFrequencyRule, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "meal_frequency_rules", tuple(self.meal_frequency_rules))

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "FishTypeParameters":
        """
        Constrói os parâmetros a partir do documento do catálogo de referência
        (chaves camelCase, matriz com `weight_ranges`/`temperatures`/`rates`).

        Raises:
            ValidationError: se faltar alguma chave obrigatória.
        """
        try:
            matrix = data["feedingRateMatrix"]
            return FishTypeParameters(
                do_min=float(data["doMin"]),
                do_safe=float(data["doSafe"]),
                ph_min=float(data["phMin"]),
                ph_max=float(data["phMax"]),
                nh3_safe=float(data["nh3Safe"]),
                nh3_critical=float(data["nh3Critical"]),
                no2_max=float(data["no2Max"]),
                temp_min=float(data["tempMin"]),
                temp_max=float(data["tempMax"]),
                temp_optimal=float(data["tempOptimal"]),
                fcr_min=float(data["fcrMin"]),
                fcr_max=float(data["fcrMax"]),
                survival_rate=float(data["survivalRate"]),
                feeding_rate_matrix=FeedingRateMatrix(
                    weight_ranges=_ranges(matrix["weight_ranges"]),
                    temperatures=matrix["temperatures"],
                    rates=matrix["rates"],
                ),
                meal_frequency_rules=[
                    MealFrequencyRule(
                        max_weight=None if r.get("maxWeight") is None else float(r["maxWeight"]),
                        meals_per_day=int(r["mealsPerDay"]),
                    )
                    for r in data.get("mealFrequencyRules", [])
                ],
            )
        except KeyError as e:
            raise ValidationError(f"Parâmetro de espécie ausente: {e.args[0]}") from e


def _ranges(raw: Sequence[Dict[str, float]]) -> List[WeightRange]:
    return [WeightRange(float(r["min"]), float(r["max"])) for r in raw]
