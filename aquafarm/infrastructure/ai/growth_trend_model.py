# aquafarm/infrastructure/ai/growth_trend_model.py
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np
from sklearn.linear_model import LinearRegression
from sklearn.metrics import r2_score

from aquafarm.config.settings import GROWTH_TREND_MIN_POINTS
from aquafarm.domain.entities.fish_batch import FishBatch
from aquafarm.domain.errors import PreconditionError
from aquafarm.domain.value_objects import Weight


@dataclass(frozen=True)
class GrowthTrend:
    """
    Curva exponencial ajustada: ln(peso_g) = ln(w0) + (SGR / 100) × dia.

    Atributos:
        sgr: Taxa de crescimento específico estimada (%/dia).
        initial_weight_g: Peso no dia 0 segundo o ajuste.
        r2: Coeficiente de determinação no espaço log.
        n_points: Quantidade de pontos usados.
    """
    sgr: float
    initial_weight_g: float
    r2: float
    n_points: int

    def project_weight(self, day: float) -> Weight:
        """Peso previsto no dia `day` desde o povoamento."""
        return Weight.from_grams(self.initial_weight_g * math.exp(self.sgr * day / 100.0))


def growth_points(batch: FishBatch) -> Tuple[List[float], List[float]]:
    """
    Pontos (dias, peso médio g) do lote: povoamento (dia 0) + biometrias.
    """
    days = [0.0] + [float(r.days_in_culture) for r in batch.growth_history]
    weights = [batch.initial_weight.to_grams()] + [
        r.statistics.average_weight.to_grams() for r in batch.growth_history
    ]
    return days, weights


def fit_growth_trend(days: Sequence[float], weights_g: Sequence[float]) -> GrowthTrend:
    """
    Ajusta a curva por regressão linear de ln(peso) sobre os dias.

    Raises:
        PreconditionError: menos de GROWTH_TREND_MIN_POINTS dias distintos,
            tamanhos diferentes ou peso não positivo.
    """
    if len(days) != len(weights_g):
        raise PreconditionError(f"{len(days)} dias para {len(weights_g)} pesos.")
    if len(set(days)) < GROWTH_TREND_MIN_POINTS:
        raise PreconditionError(
            f"Ajuste exige ao menos {GROWTH_TREND_MIN_POINTS} dias distintos."
        )
    if any(w <= 0 for w in weights_g):
        raise PreconditionError("Ajuste exige pesos > 0.")

    X = np.asarray(days, dtype=float).reshape(-1, 1)
    y = np.log(np.asarray(weights_g, dtype=float))

    model = LinearRegression()
    model.fit(X, y)
    r2 = r2_score(y, model.predict(X)) if len(y) > 2 else 1.0

    return GrowthTrend(
        sgr=float(model.coef_[0] * 100.0),
        initial_weight_g=float(np.exp(model.intercept_)),
        r2=float(r2),
        n_points=len(y),
    )


def fit_batch_trend(batch: FishBatch) -> GrowthTrend:
    days, weights = growth_points(batch)
    return fit_growth_trend(days, weights)
