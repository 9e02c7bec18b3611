"""
Necessidade de ração calculada a partir da biomassa e da qualidade da água.

Este módulo define as estruturas imutáveis devolvidas pelo cálculo de
alimentação: a necessidade de um lote (`FeedingRequirement`), os fatores de
segurança aplicados e os consolidados por tanque e por fazenda.

Princípios:
- **Imutabilidade**: dataclasses `frozen=True`, prontas para serialização.
- **Determinismo**: para a mesma leitura, biomassa e parâmetros da espécie,
  a necessidade é reprodutível.
- **Corte de segurança**: `SafetyStatus.STOPPED` significa "não alimentar".
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Tuple

from aquafarm.domain.enums import SafetyStatus
from aquafarm.domain.value_objects import WaterQuality, Weight


@dataclass(frozen=True)
class SafetyFactors:
    """
    Correções multiplicativas da taxa de alimentação, cada uma em [0, 1.05].

    Attributes:
        temperature: Fator pela distância à temperatura ótima.
        oxygen: Fator pelo O2 dissolvido (0 = parar).
        ammonia: Fator pela amônia tóxica (0 = parar).
    """
    temperature: float
    oxygen: float
    ammonia: float

    @property
    def product(self) -> float:
        return self.temperature * self.oxygen * self.ammonia


@dataclass(frozen=True)
class FeedingRequirement:
    """
    Necessidade diária de ração de um lote.

    Attributes:
        total_daily_feed: Ração total do dia.
        feed_per_meal: Ração por refeição.
        meals_per_day: Refeições por dia.
        safety_status: OK, WARNING ou STOPPED.
        factors: Fatores de segurança aplicados.
        base_feeding_rate: Taxa da matriz (% biomassa/dia).
        final_feeding_rate: Taxa após os fatores (% biomassa/dia).
    """
    total_daily_feed: Weight
    feed_per_meal: Weight
    meals_per_day: int
    safety_status: SafetyStatus
    factors: SafetyFactors
    base_feeding_rate: float = 0.0
    final_feeding_rate: float = 0.0

    @staticmethod
    def stopped() -> "FeedingRequirement":
        """Necessidade nula para lotes que não podem ser alimentados."""
        return FeedingRequirement(
            total_daily_feed=Weight.zero(),
            feed_per_meal=Weight.zero(),
            meals_per_day=0,
            safety_status=SafetyStatus.STOPPED,
            factors=SafetyFactors(0.0, 0.0, 0.0),
        )

    def to_dict(self) -> dict:
        return {
            "total_daily_feed_g": round(self.total_daily_feed.to_grams(), 2),
            "feed_per_meal_g": round(self.feed_per_meal.to_grams(), 2),
            "meals_per_day": self.meals_per_day,
            "safety_status": self.safety_status.name,
            "factors": {
                "temperature": self.factors.temperature,
                "oxygen": self.factors.oxygen,
                "ammonia": self.factors.ammonia,
            },
            "base_feeding_rate": self.base_feeding_rate,
            "final_feeding_rate": round(self.final_feeding_rate, 4),
        }


@dataclass(frozen=True)
class FeedingRecord:
    """Registro de uma alimentação efetuada em um lote."""
    feed_amount: Weight
    meals_per_day: int
    feed_date: datetime
    water_quality: WaterQuality


@dataclass(frozen=True)
class BatchFeedingRequirement:
    batch_id: str
    requirement: FeedingRequirement


@dataclass(frozen=True)
class TankFeedingRequirement:
    """Consolidado de ração de um tanque (somente lotes ativos)."""
    tank_id: str
    total_daily_feed: Weight
    batch_requirements: Tuple[BatchFeedingRequirement, ...]
    overall_status: SafetyStatus
    water_quality: WaterQuality


@dataclass(frozen=True)
class FarmFeedingRequirement:
    """
    Consolidado de ração da fazenda.

    `skipped_tanks` lista os tanques ativos ignorados por falta de leitura
    de qualidade da água.
    """
    farm_id: str
    total_daily_feed: Weight
    tank_requirements: Tuple[TankFeedingRequirement, ...]
    overall_status: SafetyStatus
    skipped_tanks: Tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "farm_id": self.farm_id,
            "total_daily_feed_kg": round(self.total_daily_feed.to_kilograms(), 3),
            "overall_status": self.overall_status.name,
            "tanks": [
                {
                    "tank_id": t.tank_id,
                    "total_daily_feed_kg": round(t.total_daily_feed.to_kilograms(), 3),
                    "overall_status": t.overall_status.name,
                    "batches": {
                        b.batch_id: b.requirement.to_dict() for b in t.batch_requirements
                    },
                }
                for t in self.tank_requirements
            ],
            "skipped_tanks": list(self.skipped_tanks),
        }
