# aquafarm/domain/use_cases/plan_harvest_use_case.py
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional, Sequence, Tuple
import logging

from aquafarm.domain.entities.fish_batch import FishBatch
from aquafarm.domain.entities.harvest import HarvestPrediction, OptimalHarvest
from aquafarm.domain.errors import PreconditionError
from aquafarm.domain.services.harvest_prediction_service import HarvestPredictionService
from aquafarm.domain.value_objects import Weight

log = logging.getLogger("aquafarm.usecases.harvest")

# assinatura do estimador de SGR (injeção de dependência)
SgrEstimator = Callable[[FishBatch], float]

@dataclass(frozen=True)
class HarvestPlan:
    """
    DTO imutável com o plano de despesca de um lote.

    Atributos:
        sgr: SGR (%/dia) usada nas projeções.
        sgr_source: 'estimator' ou 'latest_record'.
        average_daily_feed: Ração média diária usada nos custos.
        predictions: Uma projeção por peso-alvo, na ordem informada.
        optimal: Candidato de maior lucro bruto.
    """
    sgr: float
    sgr_source: str
    average_daily_feed: Weight
    predictions: Tuple[HarvestPrediction, ...]
    optimal: OptimalHarvest

class PlanHarvestUseCase:
    """
    Planeja a despesca de um lote ativo:
    - obtém a SGR do estimador injetado (ex.: ajuste de tendência) ou da última biometria
    - projeta cada peso-alvo candidato
    - escolhe o candidato de maior lucro bruto
    """

    def __init__(
        self,
        harvest_service: Optional[HarvestPredictionService] = None,
        sgr_estimator: Optional[SgrEstimator] = None,
    ) -> None:
        """
        Args:
            harvest_service: Serviço de projeção (instância padrão se omitido).
            sgr_estimator: Função opcional lote -> SGR (%/dia).
        """
        self.harvest_service = harvest_service or HarvestPredictionService()
        self.sgr_estimator = sgr_estimator  # pode ser injetado nos testes

    def execute(
        self,
        batch: FishBatch,
        target_weights: Sequence[Weight],
        market_prices: Sequence[float],
        feed_price_per_kg: float,
        average_daily_feed: Optional[Weight] = None,
        current_date: Optional[datetime] = None,
    ) -> HarvestPlan:
        """
        Gera o plano de despesca.

        Fluxo resumido:
            - Exige lote ativo.
            - SGR pelo estimador; sem estimador, pela última biometria.
            - Ração média diária informada ou derivada do histórico
              (total / dias distintos de alimentação; zero se vazio).
            - Projeta cada alvo e escolhe o de maior lucro.

        Raises:
            PreconditionError: lote inativo, sem biometria para a SGR,
                SGR não positiva ou candidatos inválidos.
        """
        if not batch.is_active():
            raise PreconditionError(f"Lote {batch.id} não está ativo.")

        start = current_date or datetime.now(timezone.utc)
        sgr, source = self._resolve_sgr(batch)
        if sgr <= 0:
            raise PreconditionError(f"SGR do lote {batch.id} não é positiva ({sgr:.3f}).")

        daily_feed = average_daily_feed if average_daily_feed is not None else self._average_daily_feed(batch)
        stats = batch.current_stats

        predictions = tuple(
            self.harvest_service.predict_harvest(stats, w, sgr, stats.survival_rate, current_date=start)
            for w in target_weights
        )
        optimal = self.harvest_service.determine_optimal_harvest_timing(
            stats, target_weights, market_prices, sgr, feed_price_per_kg, daily_feed, current_date=start
        )

        log.info("harvest_planned batch=%s sgr=%.3f source=%s candidates=%d optimal_g=%.1f",
                 batch.id, sgr, source, len(predictions), optimal.optimal_weight.to_grams())
        return HarvestPlan(
            sgr=sgr,
            sgr_source=source,
            average_daily_feed=daily_feed,
            predictions=predictions,
            optimal=optimal,
        )

    # ---------- helpers ----------
    def _resolve_sgr(self, batch: FishBatch) -> Tuple[float, str]:
        if self.sgr_estimator is not None:
            return float(self.sgr_estimator(batch)), "estimator"
        latest = batch.latest_growth_record()
        if latest is None:
            raise PreconditionError(f"Lote {batch.id} sem biometria para estimar a SGR.")
        return latest.sgr, "latest_record"

    @staticmethod
    def _average_daily_feed(batch: FishBatch) -> Weight:
        history = batch.feeding_history
        if not history:
            return Weight.zero()
        days = {r.feed_date.date() for r in history}
        return Weight.from_grams(batch.total_feed_consumed().to_grams() / len(days))
