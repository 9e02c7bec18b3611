from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Tuple

from aquafarm.domain.entities.alert import WaterQualityAlert
from aquafarm.domain.enums import WaterParameter, WaterQualityStatus


@dataclass(frozen=True)
class ParameterAssessment:
    """Valor avaliado de um parâmetro e sua classificação."""
    value: float
    status: WaterQualityStatus


@dataclass(frozen=True)
class WaterQualityAssessment:
    """
    Resultado da avaliação de uma leitura de qualidade da água.

    Attributes:
        status: Pior status entre os cinco parâmetros.
        alerts: Alertas emitidos, na ordem de avaliação.
        parameters: Valor/status por parâmetro (amônia = NH3 tóxica).
        assessed_at: Instante da medição avaliada.
        action_required: True se o status geral for WARNING ou CRITICAL.
    """
    status: WaterQualityStatus
    alerts: Tuple[WaterQualityAlert, ...]
    parameters: Dict[WaterParameter, ParameterAssessment]
    assessed_at: datetime
    action_required: bool

    def to_dict(self) -> dict:
        return {
            "status": self.status.name,
            "alerts": [a.to_dict() for a in self.alerts],
            "parameters": {
                p.value: {"value": pa.value, "status": pa.status.name}
                for p, pa in self.parameters.items()
            },
            "assessed_at": self.assessed_at.isoformat(),
            "action_required": self.action_required,
        }
