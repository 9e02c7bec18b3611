from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Tuple

from aquafarm.domain.enums import PerformanceRating
from aquafarm.domain.value_objects import BatchStatistics, Weight


@dataclass(frozen=True)
class GrowthRecord:
    """
    Biometria registrada em um lote.

    Attributes:
        recorded_at: Instante da biometria (UTC).
        statistics: Estatísticas do lote já com o novo peso médio.
        weight_gain_g: Ganho individual desde a biometria anterior (g, pode ser negativo).
        days_in_culture: Dias desde o povoamento.
        sgr: Taxa de crescimento específico desde o povoamento (%/dia).
        adg: Ganho médio diário desde o povoamento (g/dia).
    """
    recorded_at: datetime
    statistics: BatchStatistics
    weight_gain_g: float
    days_in_culture: int
    sgr: float
    adg: float


@dataclass(frozen=True)
class GrowthMetrics:
    weight_gain: Weight
    sgr: float
    adg: float
    fcr: float
    per: float
    feed_efficiency: float
    days_in_culture: int


@dataclass(frozen=True)
class GrowthPerformance:
    """Avaliação de FCR e SGR contra as referências da espécie."""
    fcr_rating: PerformanceRating
    sgr_rating: PerformanceRating
    overall_rating: PerformanceRating
    metrics: GrowthMetrics
    recommendations: Tuple[str, ...]
