# aquafarm/domain/services/water_quality_assessment_service.py
from __future__ import annotations

import logging
from typing import List

from aquafarm.config.settings import (
    PH_OPTIMAL_RANGE,
    WATER_EXCHANGE_ROUTINE,
    WATER_EXCHANGE_TIERS,
)
from aquafarm.domain.entities.alert import WaterQualityAlert
from aquafarm.domain.entities.fish_type import FishTypeParameters
from aquafarm.domain.entities.water_assessment import ParameterAssessment, WaterQualityAssessment
from aquafarm.domain.enums import WaterParameter, WaterQualityStatus
from aquafarm.domain.value_objects import Volume, WaterQuality

log = logging.getLogger("aquafarm.services.water_quality")

Status = WaterQualityStatus


class WaterQualityAssessmentService:
    """
    Classifica cada parâmetro da água, emite alertas e deriva o status geral.

    Ordem de avaliação: O2 dissolvido, pH, amônia tóxica, nitrito, temperatura.
    Sem efeitos colaterais; a leitura já chega validada pelo WaterQuality.
    """

    def assess(self, water_quality: WaterQuality, params: FishTypeParameters) -> WaterQualityAssessment:
        """
        Avalia uma leitura contra os limiares da espécie.

        Args:
            water_quality: Leitura a avaliar.
            params: Parâmetros de referência da espécie.

        Returns:
            WaterQualityAssessment com status geral (pior dos cinco), alertas
            na ordem de avaliação e `action_required` para WARNING/CRITICAL.
        """
        alerts: List[WaterQualityAlert] = []
        nh3 = water_quality.calculate_toxic_ammonia()

        do_status = self._assess_dissolved_oxygen(water_quality.dissolved_oxygen, params, alerts)
        ph_status = self._assess_ph(water_quality.ph, params, alerts)
        nh3_status = self._assess_ammonia(nh3, params, alerts)
        no2_status = self._assess_nitrite(water_quality.nitrite, params, alerts)
        temp_status = self._assess_temperature(water_quality.temperature, params, alerts)

        overall = Status.worst([do_status, ph_status, nh3_status, no2_status, temp_status])

        if overall is Status.CRITICAL:
            log.warning("water_quality_critical parameters=%s",
                        [a.parameter.name for a in alerts if a.is_critical])
        else:
            log.debug("water_quality_assessed status=%s alerts=%d", overall.name, len(alerts))

        return WaterQualityAssessment(
            status=overall,
            alerts=tuple(alerts),
            parameters={
                WaterParameter.DISSOLVED_OXYGEN: ParameterAssessment(water_quality.dissolved_oxygen, do_status),
                WaterParameter.PH: ParameterAssessment(water_quality.ph, ph_status),
                WaterParameter.AMMONIA: ParameterAssessment(nh3, nh3_status),
                WaterParameter.NITRITE: ParameterAssessment(water_quality.nitrite, no2_status),
                WaterParameter.TEMPERATURE: ParameterAssessment(water_quality.temperature, temp_status),
            },
            assessed_at=water_quality.measured_at,
            action_required=overall in (Status.CRITICAL, Status.WARNING),
        )

    def calculate_water_exchange_rate(self, water_quality: WaterQuality, tank_volume: Volume) -> Volume:
        """
        Volume de troca de água recomendado pela amônia tóxica:
        NH3 > 0.1 → 50%, > 0.05 → 30%, > 0.02 → 20%, senão rotina de 10%.
        """
        nh3 = water_quality.calculate_toxic_ammonia()
        fraction = WATER_EXCHANGE_ROUTINE
        for limit, tier_fraction in WATER_EXCHANGE_TIERS:
            if nh3 > limit:
                fraction = tier_fraction
                break
        return Volume.from_cubic_meters(tank_volume.to_cubic_meters() * fraction)

    # ---------- helpers ----------
    @staticmethod
    def _assess_dissolved_oxygen(value: float, params: FishTypeParameters,
                                 alerts: List[WaterQualityAlert]) -> WaterQualityStatus:
        if value < params.do_min:
            alerts.append(WaterQualityAlert.critical(
                WaterParameter.DISSOLVED_OXYGEN,
                f"O2 dissolvido criticamente baixo ({value} mg/L). Aeração imediata necessária!",
                value, params.do_min,
                "Ligar aeradores imediatamente e suspender a alimentação",
            ))
            return Status.CRITICAL
        if value < params.do_safe:
            alerts.append(WaterQualityAlert.warning(
                WaterParameter.DISSOLVED_OXYGEN,
                f"O2 dissolvido abaixo do nível seguro ({value} mg/L)",
                value, params.do_safe,
                "Aumentar a aeração e reduzir a alimentação em 25%",
            ))
            return Status.WARNING
        if value < params.do_safe + 1:
            return Status.ACCEPTABLE
        return Status.OPTIMAL

    @staticmethod
    def _assess_ph(value: float, params: FishTypeParameters,
                   alerts: List[WaterQualityAlert]) -> WaterQualityStatus:
        if value < params.ph_min or value > params.ph_max:
            alerts.append(WaterQualityAlert.critical(
                WaterParameter.PH,
                f"pH fora da faixa tolerada ({value})",
                value, f"{params.ph_min}-{params.ph_max}",
                "Aplicar calcário para elevar o pH" if value < params.ph_min
                else "Troca parcial de água para reduzir o pH",
            ))
            return Status.CRITICAL
        lo, hi = PH_OPTIMAL_RANGE
        if value < lo or value > hi:
            alerts.append(WaterQualityAlert.warning(
                WaterParameter.PH,
                f"pH abaixo do ideal ({value})" if value < lo else f"pH acima do ideal ({value})",
                value, f"{lo}-{hi}",
                "Monitorar de perto e preparar medidas corretivas",
            ))
            return Status.WARNING
        return Status.OPTIMAL

    @staticmethod
    def _assess_ammonia(nh3: float, params: FishTypeParameters,
                        alerts: List[WaterQualityAlert]) -> WaterQualityStatus:
        if nh3 > params.nh3_critical:
            alerts.append(WaterQualityAlert.critical(
                WaterParameter.AMMONIA,
                f"Amônia tóxica criticamente alta ({nh3:.4f} mg/L)",
                nh3, params.nh3_critical,
                "Suspender a alimentação e trocar 30-50% da água",
            ))
            return Status.CRITICAL
        if nh3 > params.nh3_safe:
            alerts.append(WaterQualityAlert.warning(
                WaterParameter.AMMONIA,
                f"Amônia tóxica elevada ({nh3:.4f} mg/L)",
                nh3, params.nh3_safe,
                "Reduzir a alimentação em 50% e preparar troca de água",
            ))
            return Status.WARNING
        if nh3 > params.nh3_safe * 0.5:
            return Status.ACCEPTABLE
        return Status.OPTIMAL

    @staticmethod
    def _assess_nitrite(value: float, params: FishTypeParameters,
                        alerts: List[WaterQualityAlert]) -> WaterQualityStatus:
        if value > params.no2_max:
            alerts.append(WaterQualityAlert.warning(
                WaterParameter.NITRITE,
                f"Nitrito elevado ({value} mg/L)",
                value, params.no2_max,
                "Adicionar sal (1-2 ppt) e aumentar a aeração",
            ))
            return Status.WARNING
        if value > params.no2_max * 0.5:
            return Status.ACCEPTABLE
        return Status.OPTIMAL

    @staticmethod
    def _assess_temperature(value: float, params: FishTypeParameters,
                            alerts: List[WaterQualityAlert]) -> WaterQualityStatus:
        if value < params.temp_min or value > params.temp_max:
            alerts.append(WaterQualityAlert.critical(
                WaterParameter.TEMPERATURE,
                f"Temperatura fora da faixa de tolerância ({value} °C)",
                value, f"{params.temp_min}-{params.temp_max} °C",
                "Peixes em estresse térmico - reduzir a alimentação" if value < params.temp_min
                else "Aumentar a renovação de água ou sombrear o tanque",
            ))
            return Status.CRITICAL
        diff = abs(value - params.temp_optimal)
        if diff > 4:
            alerts.append(WaterQualityAlert.warning(
                WaterParameter.TEMPERATURE,
                f"Temperatura fora do ideal ({value} °C)",
                value, f"{params.temp_optimal} °C (ótima)",
                "Ajustar a taxa de alimentação pela temperatura",
            ))
            return Status.WARNING
        if diff > 2:
            return Status.ACCEPTABLE
        return Status.OPTIMAL
