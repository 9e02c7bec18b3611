# aquafarm/domain/services/feeding_calculation_service.py
from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from aquafarm.config.settings import FEEDING_THRESHOLDS
from aquafarm.domain.entities.feed_requirement import FeedingRequirement, SafetyFactors
from aquafarm.domain.entities.fish_type import FeedingRateMatrix, FishTypeParameters, MealFrequencyRule
from aquafarm.domain.enums import SafetyStatus
from aquafarm.domain.value_objects import WaterQuality, Weight

log = logging.getLogger("aquafarm.services.feeding")


class FeedingCalculationService:
    """
    Calcula a necessidade diária de ração de um lote:

    - taxa base pela matriz da espécie (faixa de peso × temperatura)
    - fatores de segurança por temperatura, O2 dissolvido e amônia tóxica
    - total diário, refeições por dia e ração por refeição

    Serviço sem estado: todas as entradas chegam por argumento.
    """

    def calculate_daily_feed(
        self,
        biomass: Weight,
        average_weight: Weight,
        water_quality: WaterQuality,
        params: FishTypeParameters,
    ) -> FeedingRequirement:
        """
        Gera a necessidade diária de ração.

        Fluxo:
            1) Taxa base da matriz para o peso médio e a temperatura atual.
            2) Fatores de segurança (temperatura, oxigênio, amônia).
            3) Status de segurança (STOPPED / WARNING / OK).
            4) Taxa final = taxa base × produto dos fatores.
            5) Total = biomassa (kg) × taxa final / 100.
            6) Refeições/dia pela primeira regra aplicável.
            7) Ração por refeição = total / refeições.

        Args:
            biomass: Biomassa do lote.
            average_weight: Peso médio individual.
            water_quality: Leitura atual do tanque.
            params: Parâmetros da espécie.

        Returns:
            FeedingRequirement com taxas, fatores e status.
        """
        avg_g = average_weight.to_grams()
        base_rate = self.find_base_feeding_rate(
            avg_g, water_quality.temperature, params.feeding_rate_matrix
        )
        factors = self.calculate_safety_factors(water_quality, params)
        status = self.determine_safety_status(factors)

        final_rate = base_rate * factors.product
        total = Weight.from_kilograms(biomass.to_kilograms() * (final_rate / 100.0))
        meals = self.determine_meals_per_day(avg_g, params.meal_frequency_rules)
        per_meal = Weight.from_grams(total.to_grams() / meals)

        log.debug("daily_feed base=%.3f final=%.3f total_g=%.1f meals=%d status=%s",
                  base_rate, final_rate, total.to_grams(), meals, status.name)

        return FeedingRequirement(
            total_daily_feed=total,
            feed_per_meal=per_meal,
            meals_per_day=meals,
            safety_status=status,
            factors=factors,
            base_feeding_rate=base_rate,
            final_feeding_rate=final_rate,
        )

    def calculate_safe_feed_amount(
        self,
        biomass: Weight,
        average_weight: Weight,
        water_quality: WaterQuality,
        params: FishTypeParameters,
    ) -> Weight:
        """
        Quantidade diária a fornecer; zero sempre que o status for STOPPED.
        Este é o corte de segurança que todo chamador deve respeitar.
        """
        requirement = self.calculate_daily_feed(biomass, average_weight, water_quality, params)
        if requirement.safety_status is SafetyStatus.STOPPED:
            log.warning("feeding_stopped oxygen_factor=%.2f ammonia_factor=%.2f",
                        requirement.factors.oxygen, requirement.factors.ammonia)
            return Weight.zero()
        return requirement.total_daily_feed

    @staticmethod
    def find_base_feeding_rate(weight_g: float, temperature: float, matrix: FeedingRateMatrix) -> float:
        """
        Taxa base (% biomassa/dia) da matriz.

        Faixa de peso: a primeira com min <= peso <= max. Abaixo da primeira
        faixa usa a primeira; acima da última usa a última; num intervalo
        entre faixas usa a faixa anterior.
        Coluna de temperatura: a referência mais próxima (primeira em empate).
        """
        mins = np.array([r.min for r in matrix.weight_ranges], dtype=float)
        maxs = np.array([r.max for r in matrix.weight_ranges], dtype=float)

        inside = (weight_g >= mins) & (weight_g <= maxs)
        if inside.any():
            row = int(np.argmax(inside))
        elif weight_g < mins[0]:
            row = 0
        elif weight_g > maxs[-1]:
            row = len(mins) - 1
        else:
            row = int(np.flatnonzero(mins <= weight_g)[-1])

        temps = np.array(matrix.temperatures, dtype=float)
        # argmin devolve o primeiro índice em empate
        col = int(np.argmin(np.abs(temps - temperature)))

        return matrix.rates[row][col]

    def calculate_safety_factors(self, water_quality: WaterQuality, params: FishTypeParameters) -> SafetyFactors:
        return SafetyFactors(
            temperature=self._temperature_factor(water_quality.temperature, params.temp_optimal),
            oxygen=self._oxygen_factor(water_quality.dissolved_oxygen, params.do_min, params.do_safe),
            ammonia=self._ammonia_factor(
                water_quality.calculate_toxic_ammonia(), params.nh3_safe, params.nh3_critical
            ),
        )

    @staticmethod
    def determine_safety_status(factors: SafetyFactors) -> SafetyStatus:
        if factors.oxygen == 0 or factors.ammonia == 0:
            return SafetyStatus.STOPPED
        if factors.oxygen < 1 or factors.ammonia < 1 or factors.temperature < 1:
            return SafetyStatus.WARNING
        return SafetyStatus.OK

    @staticmethod
    def determine_meals_per_day(weight_g: float, rules: Sequence[MealFrequencyRule]) -> int:
        for rule in rules:
            if rule.applies_to(weight_g):
                return rule.meals_per_day
        return int(FEEDING_THRESHOLDS["default_meals_per_day"])

    # ---------- helpers ----------
    @staticmethod
    def _temperature_factor(current: float, optimal: float) -> float:
        diff = current - optimal
        if diff < -3:
            return 0.75
        if diff < -1:
            return 0.85
        if diff <= 1:
            return 1.0
        if diff <= 2:
            return 1.05
        return 0.95

    @staticmethod
    def _oxygen_factor(current: float, do_min: float, do_safe: float) -> float:
        if current < do_min:
            return 0.0  # crítico: parar alimentação
        if current < FEEDING_THRESHOLDS["oxygen_hard_step"]:
            return 0.75
        if current < do_safe:
            return 0.9
        return 1.0

    @staticmethod
    def _ammonia_factor(nh3: float, nh3_safe: float, nh3_critical: float) -> float:
        if nh3 > nh3_critical:
            return 0.0  # crítico: parar alimentação
        if nh3 > FEEDING_THRESHOLDS["nh3_hard_step"]:
            return 0.5
        if nh3 > nh3_safe:
            return 0.8
        return 1.0
