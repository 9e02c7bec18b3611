from enum import Enum, auto

class TankStatus(Enum):
    """Estado operacional do tanque."""
    EMPTY = auto()        # Sem lotes, disponível para povoamento
    ACTIVE = auto()       # Operando com lotes
    MAINTENANCE = auto()  # Em manutenção (temporariamente indisponível)
    INACTIVE = auto()     # Fora de operação

class BatchStatus(Enum):
    """Ciclo de vida de um lote de peixes."""
    ACTIVE = auto()       # Em cultivo
    HARVESTED = auto()    # Despescado (terminal)

class WaterQualityStatus(Enum):
    """
    Classificação de um parâmetro de qualidade da água.
    O valor numérico ordena do melhor para o pior.
    """
    OPTIMAL = 1
    ACCEPTABLE = 2
    WARNING = 3
    CRITICAL = 4

    @classmethod
    def worst(cls, statuses) -> "WaterQualityStatus":
        """Pior status da coleção (OPTIMAL se vazia)."""
        return max(statuses, key=lambda s: s.value, default=cls.OPTIMAL)

class Severity(Enum):
    """Nível de severidade para alertas."""
    WARNING = auto()   # Atenção: fora do ideal
    CRITICAL = auto()  # Crítico: ação imediata necessária

class WaterParameter(Enum):
    """Parâmetro de qualidade da água ao qual o alerta se refere."""
    DISSOLVED_OXYGEN = "Dissolved Oxygen"
    PH = "pH"
    AMMONIA = "Toxic Ammonia (NH3)"
    NITRITE = "Nitrite (NO2)"
    TEMPERATURE = "Temperature"

class SafetyStatus(Enum):
    """
    Situação de segurança da alimentação.
    O valor numérico ordena por gravidade (STOPPED domina WARNING domina OK).
    """
    OK = 1
    WARNING = 2
    STOPPED = 3

    @classmethod
    def worst(cls, statuses) -> "SafetyStatus":
        return max(statuses, key=lambda s: s.value, default=cls.OK)

class PerformanceRating(Enum):
    """Classificação de desempenho zootécnico (valor = escore ordinal)."""
    POOR = 1
    ACCEPTABLE = 2
    GOOD = 3
    EXCELLENT = 4
