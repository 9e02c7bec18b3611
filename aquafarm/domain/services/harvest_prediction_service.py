# aquafarm/domain/services/harvest_prediction_service.py
from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence

from aquafarm.domain.entities.harvest import HarvestEconomics, HarvestPrediction, OptimalHarvest
from aquafarm.domain.errors import PreconditionError
from aquafarm.domain.value_objects import BatchStatistics, Weight

log = logging.getLogger("aquafarm.services.harvest")


class HarvestPredictionService:
    """
    Projeção de despesca por crescimento exponencial (SGR constante) e
    avaliação econômica de pesos-alvo candidatos.
    """

    def predict_future_weight(self, current_weight: Weight, sgr: float, days_ahead: float) -> Weight:
        """Peso futuro = atual × e^(SGR × dias / 100)."""
        return Weight.from_grams(current_weight.to_grams() * math.exp(sgr * days_ahead / 100.0))

    def calculate_days_to_target(self, current_weight: Weight, target_weight: Weight, sgr: float) -> int:
        """
        Dias = ceil((ln(alvo) - ln(atual)) / (SGR / 100)).

        Alvo já atingido resulta em 0 dias.

        Raises:
            PreconditionError: se SGR <= 0 ou algum peso for zero.
        """
        if sgr <= 0:
            raise PreconditionError("SGR deve ser > 0 para projetar a despesca.")
        if current_weight.to_grams() <= 0 or target_weight.to_grams() <= 0:
            raise PreconditionError("Projeção exige pesos > 0.")
        days = (math.log(target_weight.to_grams()) - math.log(current_weight.to_grams())) / (sgr / 100.0)
        return max(0, math.ceil(days))

    def predict_harvest_date(
        self,
        current_weight: Weight,
        target_weight: Weight,
        sgr: float,
        current_date: Optional[datetime] = None,
    ) -> datetime:
        start = current_date or datetime.now(timezone.utc)
        return start + timedelta(days=self.calculate_days_to_target(current_weight, target_weight, sgr))

    def predict_harvest(
        self,
        current_stats: BatchStatistics,
        target_weight: Weight,
        sgr: float,
        survival_rate: float,
        current_date: Optional[datetime] = None,
    ) -> HarvestPrediction:
        """
        Projeção completa para um peso-alvo.

        Args:
            current_stats: Estatísticas atuais do lote.
            target_weight: Peso individual de despesca.
            sgr: Taxa de crescimento específico (%/dia).
            survival_rate: Sobrevivência projetada (%).
            current_date: Data de referência (agora, se omitida).

        Returns:
            HarvestPrediction com data, dias, sobreviventes
            (floor(quantidade × sobrevivência / 100)) e produção final.
        """
        start = current_date or datetime.now(timezone.utc)
        days = self.calculate_days_to_target(current_stats.average_weight, target_weight, sgr)
        final_count = math.floor(current_stats.fish_count * (survival_rate / 100.0))

        return HarvestPrediction(
            harvest_date=start + timedelta(days=days),
            days_to_harvest=days,
            target_weight=target_weight,
            expected_final_count=final_count,
            final_production=Weight.from_grams(target_weight.to_grams() * final_count),
            current_sgr=sgr,
            projected_survival_rate=survival_rate,
        )

    def calculate_harvest_economics(
        self,
        prediction: HarvestPrediction,
        average_daily_feed: Weight,
        feed_price_per_kg: float,
        market_price_per_kg: float,
        other_costs: float = 0.0,
    ) -> HarvestEconomics:
        """
        Custos restantes até a despesca e receita projetada.

        - ração restante = ração média diária × dias até a despesca
        - custo total = custo da ração restante + outros custos
        - lucro bruto = receita - custo total (custos afundados excluídos)
        - margem % = lucro / receita × 100 (0 sem receita)
        - ponto de equilíbrio (kg) = custo total / preço de mercado

        Raises:
            PreconditionError: se o preço de mercado não for positivo.
        """
        if market_price_per_kg <= 0:
            raise PreconditionError("Preço de mercado deve ser > 0.")

        remaining_feed = Weight.from_kilograms(average_daily_feed.to_kilograms() * prediction.days_to_harvest)
        feed_cost = remaining_feed.to_kilograms() * feed_price_per_kg
        total_costs = feed_cost + other_costs
        revenue = prediction.final_production.to_kilograms() * market_price_per_kg
        profit = revenue - total_costs

        return HarvestEconomics(
            remaining_feed=remaining_feed,
            remaining_feed_cost=feed_cost,
            total_remaining_costs=total_costs,
            projected_revenue=revenue,
            gross_profit=profit,
            profit_margin=(profit / revenue * 100.0) if revenue else 0.0,
            break_even_production=total_costs / market_price_per_kg,
            market_price_per_kg=market_price_per_kg,
            feed_price_per_kg=feed_price_per_kg,
        )

    def determine_optimal_harvest_timing(
        self,
        current_stats: BatchStatistics,
        target_weights: Sequence[Weight],
        market_prices: Sequence[float],
        sgr: float,
        feed_price_per_kg: float,
        average_daily_feed: Weight,
        current_date: Optional[datetime] = None,
    ) -> OptimalHarvest:
        """
        Avalia todos os pesos-alvo candidatos e escolhe o de maior lucro bruto.

        `market_prices[i]` é o preço por kg para `target_weights[i]`. Em empate
        vence o primeiro candidato encontrado.

        Raises:
            PreconditionError: listas vazias ou de tamanhos diferentes.
        """
        if not target_weights:
            raise PreconditionError("Informe ao menos um peso-alvo candidato.")
        if len(target_weights) != len(market_prices):
            raise PreconditionError(
                f"{len(target_weights)} pesos-alvo para {len(market_prices)} preços de mercado."
            )

        start = current_date or datetime.now(timezone.utc)
        best: Optional[tuple] = None  # (prediction, economics)

        for weight, price in zip(target_weights, market_prices):
            prediction = self.predict_harvest(
                current_stats, weight, sgr, current_stats.survival_rate, current_date=start
            )
            economics = self.calculate_harvest_economics(
                prediction, average_daily_feed, feed_price_per_kg, price
            )
            log.debug("harvest_candidate weight_g=%.1f price=%.2f profit=%.2f",
                      weight.to_grams(), price, economics.gross_profit)
            if best is None or economics.gross_profit > best[1].gross_profit:
                best = (prediction, economics)

        prediction, economics = best
        reason = (
            f"Maximiza o lucro em {prediction.target_weight.to_grams():g} g "
            f"com margem de {economics.profit_margin:.1f}%"
        )
        log.info("optimal_harvest weight_g=%.1f days=%d profit=%.2f",
                 prediction.target_weight.to_grams(), prediction.days_to_harvest, economics.gross_profit)

        return OptimalHarvest(
            optimal_weight=prediction.target_weight,
            optimal_date=prediction.harvest_date,
            reason=reason,
            economics=economics,
        )
