"""
Value Objects do domínio de produção aquícola.

Todos são imutáveis (`dataclass(frozen=True)`), validam seus valores no
`__post_init__` e comparam por valor. Transições (`update_weight`,
`record_mortality`) devolvem NOVAS instâncias.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import ClassVar, Optional

from aquafarm.config.settings import AMMONIA_PKA
from aquafarm.domain.errors import ValidationError


def _non_negative(value: float) -> bool:
    """Finito e >= 0 (NaN e infinito são rejeitados)."""
    return math.isfinite(value) and value >= 0


# -----------------------------------------------------------------------------
# Identificadores
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class _EntityId:
    value: str

    _label: ClassVar[str] = "Id"

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValidationError(f"{self._label} não pode estar vazio.")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class FishBatchId(_EntityId):
    """Identificador de lote de peixes."""
    _label: ClassVar[str] = "FishBatchId"


@dataclass(frozen=True)
class TankId(_EntityId):
    """Identificador de tanque."""
    _label: ClassVar[str] = "TankId"


@dataclass(frozen=True)
class FarmId(_EntityId):
    """Identificador de fazenda."""
    _label: ClassVar[str] = "FarmId"


# -----------------------------------------------------------------------------
# Grandezas
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Weight:
    """
    Massa não negativa armazenada em gramas.

    Use as fábricas `from_grams` / `from_kilograms`; nunca é alterada.
    """
    grams: float

    def __post_init__(self) -> None:
        if not _non_negative(self.grams):
            raise ValidationError(f"Peso deve ser finito e não negativo: {self.grams} g")

    @classmethod
    def from_grams(cls, grams: float) -> "Weight":
        return cls(float(grams))

    @classmethod
    def from_kilograms(cls, kg: float) -> "Weight":
        return cls(float(kg) * 1000.0)

    @classmethod
    def zero(cls) -> "Weight":
        return cls(0.0)

    def to_grams(self) -> float:
        return self.grams

    def to_kilograms(self) -> float:
        return self.grams / 1000.0

    def __add__(self, other: "Weight") -> "Weight":
        if not isinstance(other, Weight):
            return NotImplemented
        return Weight(self.grams + other.grams)


@dataclass(frozen=True)
class Volume:
    """Volume positivo armazenado em metros cúbicos."""
    cubic_meters: float

    def __post_init__(self) -> None:
        if not (math.isfinite(self.cubic_meters) and self.cubic_meters > 0):
            raise ValidationError(f"Volume deve ser > 0 (m³): {self.cubic_meters}")

    @classmethod
    def from_cubic_meters(cls, m3: float) -> "Volume":
        return cls(float(m3))

    @classmethod
    def from_liters(cls, liters: float) -> "Volume":
        """1.000 litros = 1 m³."""
        return cls(float(liters) / 1000.0)

    def to_cubic_meters(self) -> float:
        return self.cubic_meters

    def to_liters(self) -> float:
        return self.cubic_meters * 1000.0


# -----------------------------------------------------------------------------
# Qualidade da água
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class WaterQuality:
    """
    Leitura pontual da qualidade da água de um tanque.

    - Imutável: cada nova leitura substitui a anterior por inteiro.
    - Valida limites físicos (hard limits) no __post_init__.
    - `measured_at` é sempre normalizado para UTC (agora, se omitido).

    Attributes:
        temperature: Temperatura em °C (0–50).
        dissolved_oxygen: Oxigênio dissolvido em mg/L (>= 0).
        ph: pH (0–14).
        total_ammonia: Amônia total (TAN) em mg/L (>= 0).
        nitrite: Nitrito em mg/L (>= 0).
        measured_at: Instante da medição.
    """

    temperature: float
    dissolved_oxygen: float
    ph: float
    total_ammonia: float
    nitrite: float
    measured_at: Optional[datetime] = None

    # -------- Hard limits (físicos) --------
    _TEMP_MIN_HARD: ClassVar[float] = 0.0
    _TEMP_MAX_HARD: ClassVar[float] = 50.0
    _PH_MIN_HARD:   ClassVar[float] = 0.0
    _PH_MAX_HARD:   ClassVar[float] = 14.0

    def __post_init__(self) -> None:
        # Normaliza timestamp para UTC
        if self.measured_at is None:
            object.__setattr__(self, "measured_at", datetime.now(timezone.utc))
        elif self.measured_at.tzinfo is None:
            object.__setattr__(self, "measured_at", self.measured_at.replace(tzinfo=timezone.utc))

        if not (self._TEMP_MIN_HARD <= self.temperature <= self._TEMP_MAX_HARD):
            raise ValidationError(
                f"Temperatura inválida: {self.temperature}°C. "
                f"Range: {self._TEMP_MIN_HARD}-{self._TEMP_MAX_HARD}°C"
            )
        if not _non_negative(self.dissolved_oxygen):
            raise ValidationError(f"Oxigênio dissolvido deve ser finito e não negativo: {self.dissolved_oxygen}")
        if not (self._PH_MIN_HARD <= self.ph <= self._PH_MAX_HARD):
            raise ValidationError(
                f"pH inválido: {self.ph}. Range: {self._PH_MIN_HARD}-{self._PH_MAX_HARD}"
            )
        if not _non_negative(self.total_ammonia):
            raise ValidationError(f"Amônia total deve ser finita e não negativa: {self.total_ammonia}")
        if not _non_negative(self.nitrite):
            raise ValidationError(f"Nitrito deve ser finito e não negativo: {self.nitrite}")

    def calculate_toxic_ammonia(self) -> float:
        """
        Fração não ionizada (NH3) da amônia total, em mg/L.

        pKa = 0.09018 + 2729.92 / (T + 273); NH3 = TAN / (1 + 10^(pKa - pH)).
        O pKa cai com a temperatura, então NH3 cresce com T para TAN e pH fixos.
        """
        pka = AMMONIA_PKA["a"] + AMMONIA_PKA["b"] / (self.temperature + 273.0)
        return self.total_ammonia / (1.0 + math.pow(10.0, pka - self.ph))

    def to_dict(self) -> dict:
        return {
            "temperature": self.temperature,
            "dissolved_oxygen": self.dissolved_oxygen,
            "ph": self.ph,
            "total_ammonia": self.total_ammonia,
            "toxic_ammonia": round(self.calculate_toxic_ammonia(), 5),
            "nitrite": self.nitrite,
            "measured_at": self.measured_at.isoformat() if self.measured_at else None,
        }


# -----------------------------------------------------------------------------
# Estatísticas do lote
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class BatchStatistics:
    """
    Fotografia da população de um lote.

    Attributes:
        fish_count: Número de peixes vivos (>= 0).
        average_weight: Peso médio individual.
        survival_rate: Sobrevivência em % (0–100).
    """
    fish_count: int
    average_weight: Weight
    survival_rate: float = 100.0

    def __post_init__(self) -> None:
        if self.fish_count < 0:
            raise ValidationError("Quantidade de peixes não pode ser negativa.")
        if not (0.0 <= self.survival_rate <= 100.0):
            raise ValidationError(
                f"Sobrevivência deve estar entre 0 e 100: {self.survival_rate}"
            )

    def total_biomass(self) -> Weight:
        """Biomassa = quantidade × peso médio."""
        return Weight.from_grams(self.fish_count * self.average_weight.to_grams())

    def update_weight(self, new_average_weight: Weight) -> "BatchStatistics":
        return replace(self, average_weight=new_average_weight)

    def record_mortality(self, dead_count: int, initial_count: int) -> "BatchStatistics":
        """
        Nova instância descontando `dead_count`; a sobrevivência é recalculada
        sobre a população inicial do lote.
        """
        if initial_count <= 0:
            raise ValidationError("População inicial deve ser > 0 para calcular sobrevivência.")
        new_count = self.fish_count - dead_count
        return BatchStatistics(
            fish_count=new_count,
            average_weight=self.average_weight,
            survival_rate=(new_count / initial_count) * 100.0,
        )
