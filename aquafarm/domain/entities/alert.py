"""
Alertas de qualidade da água.

`WaterQualityAlert` é a unidade de informação emitida pela avaliação de
qualidade da água sempre que um parâmetro é classificado como WARNING ou
CRITICAL. É imutável e autocontida: carrega o valor medido, o limiar
aplicado e a ação recomendada ao operador.

Campos
------
- `threshold` pode ser numérico (limite único) ou texto (faixa, ex.: "6.5-9.0").
- `action` é uma instrução curta e acionável.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from aquafarm.domain.enums import Severity, WaterParameter

Threshold = Union[float, str]


@dataclass(frozen=True)
class WaterQualityAlert:
    """
    Alerta gerado para um parâmetro fora da faixa.

    Attributes:
        parameter: Parâmetro avaliado.
        severity: WARNING ou CRITICAL.
        message: Texto curto com o valor medido.
        current_value: Valor medido.
        threshold: Limiar (ou faixa) violado.
        action: Ação recomendada.
    """

    parameter: WaterParameter
    severity: Severity
    message: str
    current_value: float
    threshold: Threshold
    action: str

    # -------------------------------------------------------------------------
    # Fábricas especializadas
    # -------------------------------------------------------------------------

    @staticmethod
    def critical(parameter: WaterParameter, message: str, value: float,
                 threshold: Threshold, action: str) -> "WaterQualityAlert":
        return WaterQualityAlert(parameter, Severity.CRITICAL, message, value, threshold, action)

    @staticmethod
    def warning(parameter: WaterParameter, message: str, value: float,
                threshold: Threshold, action: str) -> "WaterQualityAlert":
        return WaterQualityAlert(parameter, Severity.WARNING, message, value, threshold, action)

    @property
    def is_critical(self) -> bool:
        return self.severity is Severity.CRITICAL

    def to_dict(self) -> dict:
        return {
            "parameter": self.parameter.value,
            "severity": self.severity.name,
            "message": self.message,
            "current_value": self.current_value,
            "threshold": self.threshold,
            "action": self.action,
        }
