# aquafarm/domain/services/growth_analysis_service.py
from __future__ import annotations

import logging
import math
from typing import List

from aquafarm.config.settings import (
    FCR_ACCEPTABLE_MARGIN,
    FCR_REDUCE_FEEDING,
    OVERALL_RATING_CUTOFFS,
    SGR_RATING_THRESHOLDS,
)
from aquafarm.domain.entities.fish_type import FishTypeParameters
from aquafarm.domain.entities.growth import GrowthMetrics, GrowthPerformance
from aquafarm.domain.enums import PerformanceRating
from aquafarm.domain.errors import PreconditionError
from aquafarm.domain.value_objects import Weight

log = logging.getLogger("aquafarm.services.growth")

Rating = PerformanceRating


class GrowthAnalysisService:
    """
    Indicadores zootécnicos de crescimento e sua avaliação.

    Cada fórmula falha com PreconditionError quando o denominador não é positivo.
    """

    def calculate_sgr(self, initial_weight: Weight, final_weight: Weight, days: float) -> float:
        """SGR = (ln(final g) - ln(inicial g)) / dias × 100."""
        if days <= 0:
            raise PreconditionError("Dias deve ser > 0 para calcular SGR.")
        if initial_weight.to_grams() <= 0 or final_weight.to_grams() <= 0:
            raise PreconditionError("SGR exige pesos > 0.")
        return (math.log(final_weight.to_grams()) - math.log(initial_weight.to_grams())) / days * 100.0

    def calculate_adg(self, initial_weight: Weight, final_weight: Weight, days: float) -> float:
        """ADG = (final - inicial) g / dias."""
        if days <= 0:
            raise PreconditionError("Dias deve ser > 0 para calcular ADG.")
        return (final_weight.to_grams() - initial_weight.to_grams()) / days

    def calculate_weight_gain(self, initial_weight: Weight, final_weight: Weight) -> Weight:
        gain = final_weight.to_grams() - initial_weight.to_grams()
        if gain < 0:
            raise PreconditionError(f"Peso final menor que o inicial (ganho {gain:.2f} g).")
        return Weight.from_grams(gain)

    def calculate_fcr(self, total_feed_consumed: Weight, total_weight_gain: Weight) -> float:
        """FCR = ração consumida (kg) / ganho de peso (kg)."""
        gain_kg = total_weight_gain.to_kilograms()
        if gain_kg <= 0:
            raise PreconditionError("Ganho de peso deve ser > 0 para calcular FCR.")
        return total_feed_consumed.to_kilograms() / gain_kg

    def calculate_per(self, weight_gain: Weight, protein_consumed: Weight) -> float:
        """PER = ganho de peso (kg) / proteína consumida (kg)."""
        protein_kg = protein_consumed.to_kilograms()
        if protein_kg <= 0:
            raise PreconditionError("Proteína consumida deve ser > 0 para calcular PER.")
        return weight_gain.to_kilograms() / protein_kg

    def calculate_feed_efficiency(self, weight_gain: Weight, feed_consumed: Weight) -> float:
        """Eficiência alimentar % = ganho / ração × 100."""
        feed_kg = feed_consumed.to_kilograms()
        if feed_kg <= 0:
            raise PreconditionError("Ração consumida deve ser > 0 para calcular eficiência.")
        return weight_gain.to_kilograms() / feed_kg * 100.0

    def calculate_condition_factor(self, weight: Weight, length_cm: float) -> float:
        """K = peso (g) / comprimento (cm)³ × 100."""
        if length_cm <= 0:
            raise PreconditionError("Comprimento deve ser > 0 para calcular o fator K.")
        return weight.to_grams() / math.pow(length_cm, 3) * 100.0

    def calculate_growth_metrics(
        self,
        initial_weight: Weight,
        current_weight: Weight,
        days: int,
        total_feed_consumed: Weight,
        protein_percentage: float,
    ) -> GrowthMetrics:
        """
        Consolida ganho, SGR, ADG, FCR, PER e eficiência alimentar.

        A proteína consumida é estimada como ração × protein_percentage / 100.
        """
        gain = self.calculate_weight_gain(initial_weight, current_weight)
        protein = Weight.from_kilograms(total_feed_consumed.to_kilograms() * (protein_percentage / 100.0))
        return GrowthMetrics(
            weight_gain=gain,
            sgr=self.calculate_sgr(initial_weight, current_weight, days),
            adg=self.calculate_adg(initial_weight, current_weight, days),
            fcr=self.calculate_fcr(total_feed_consumed, gain),
            per=self.calculate_per(gain, protein),
            feed_efficiency=self.calculate_feed_efficiency(gain, total_feed_consumed),
            days_in_culture=days,
        )

    def evaluate_performance(self, metrics: GrowthMetrics, params: FishTypeParameters) -> GrowthPerformance:
        """
        Classifica FCR (contra a faixa da espécie) e SGR (limiares absolutos);
        o geral é a média dos escores ordinais (EXCELLENT=4 ... POOR=1).
        """
        fcr_rating = self._rate_fcr(metrics.fcr, params.fcr_min, params.fcr_max)
        sgr_rating = self._rate_sgr(metrics.sgr)
        overall = self._overall_rating(fcr_rating, sgr_rating)

        log.info("growth_evaluated fcr=%.3f sgr=%.3f overall=%s", metrics.fcr, metrics.sgr, overall.name)

        return GrowthPerformance(
            fcr_rating=fcr_rating,
            sgr_rating=sgr_rating,
            overall_rating=overall,
            metrics=metrics,
            recommendations=tuple(self._recommendations(fcr_rating, sgr_rating, metrics)),
        )

    # ---------- helpers ----------
    @staticmethod
    def _rate_fcr(fcr: float, fcr_min: float, fcr_max: float) -> PerformanceRating:
        if fcr < fcr_min:
            return Rating.EXCELLENT
        if fcr <= fcr_max:
            return Rating.GOOD
        if fcr <= fcr_max * FCR_ACCEPTABLE_MARGIN:
            return Rating.ACCEPTABLE
        return Rating.POOR

    @staticmethod
    def _rate_sgr(sgr: float) -> PerformanceRating:
        if sgr > SGR_RATING_THRESHOLDS["excellent"]:
            return Rating.EXCELLENT
        if sgr > SGR_RATING_THRESHOLDS["good"]:
            return Rating.GOOD
        if sgr > SGR_RATING_THRESHOLDS["acceptable"]:
            return Rating.ACCEPTABLE
        return Rating.POOR

    @staticmethod
    def _overall_rating(fcr_rating: PerformanceRating, sgr_rating: PerformanceRating) -> PerformanceRating:
        average = (fcr_rating.value + sgr_rating.value) / 2
        if average >= OVERALL_RATING_CUTOFFS["excellent"]:
            return Rating.EXCELLENT
        if average >= OVERALL_RATING_CUTOFFS["good"]:
            return Rating.GOOD
        if average >= OVERALL_RATING_CUTOFFS["acceptable"]:
            return Rating.ACCEPTABLE
        return Rating.POOR

    @staticmethod
    def _recommendations(fcr_rating: PerformanceRating, sgr_rating: PerformanceRating,
                         metrics: GrowthMetrics) -> List[str]:
        recs: List[str] = []
        if fcr_rating is Rating.POOR:
            recs.append("Revisar a qualidade da ração e o teor de proteína")
            recs.append("Verificar doenças ou fatores de estresse")
            recs.append("Conferir a adesão ao cronograma de alimentação")
        if sgr_rating is Rating.POOR:
            recs.append("Otimizar a temperatura da água")
            recs.append("Aumentar a frequência de alimentação para peixes pequenos")
            recs.append("Verificar superlotação")
        if metrics.fcr > FCR_REDUCE_FEEDING:
            recs.append("Considerar reduzir a taxa de alimentação em 10-15%")
        if metrics.sgr < SGR_RATING_THRESHOLDS["acceptable"]:
            recs.append("Investigar possíveis inibidores de crescimento")
        if not recs:
            recs.append("Desempenho dentro da meta - manter o protocolo atual")
        return recs
