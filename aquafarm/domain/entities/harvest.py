from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from aquafarm.domain.value_objects import Weight


@dataclass(frozen=True)
class HarvestPrediction:
    """
    Projeção de despesca para um peso-alvo.

    Attributes:
        harvest_date: Data prevista da despesca.
        days_to_harvest: Dias até atingir o peso-alvo.
        target_weight: Peso individual alvo.
        expected_final_count: Sobreviventes esperados.
        final_production: Produção total (peso-alvo × sobreviventes).
        current_sgr: SGR usada na projeção (%/dia).
        projected_survival_rate: Sobrevivência usada (%).
    """
    harvest_date: datetime
    days_to_harvest: int
    target_weight: Weight
    expected_final_count: int
    final_production: Weight
    current_sgr: float
    projected_survival_rate: float


@dataclass(frozen=True)
class HarvestEconomics:
    """Custos restantes e receita projetada (custos afundados excluídos)."""
    remaining_feed: Weight
    remaining_feed_cost: float
    total_remaining_costs: float
    projected_revenue: float
    gross_profit: float
    profit_margin: float
    break_even_production: float
    market_price_per_kg: float
    feed_price_per_kg: float

    def to_dict(self) -> dict:
        return {
            "remaining_feed_kg": round(self.remaining_feed.to_kilograms(), 3),
            "remaining_feed_cost": round(self.remaining_feed_cost, 2),
            "total_remaining_costs": round(self.total_remaining_costs, 2),
            "projected_revenue": round(self.projected_revenue, 2),
            "gross_profit": round(self.gross_profit, 2),
            "profit_margin": round(self.profit_margin, 2),
            "break_even_production_kg": round(self.break_even_production, 3),
            "market_price_per_kg": self.market_price_per_kg,
            "feed_price_per_kg": self.feed_price_per_kg,
        }


@dataclass(frozen=True)
class OptimalHarvest:
    optimal_weight: Weight
    optimal_date: datetime
    reason: str
    economics: HarvestEconomics
