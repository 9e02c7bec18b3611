"""
Lote de peixes povoado em um tanque.

`FishBatch` é mutável apenas pelas operações de negócio (biometria,
mortalidade, alimentação e despesca); os atributos são expostos como
propriedades somente leitura. Cada operação valida tudo antes de alterar o
estado: ou conclui por inteiro, ou deixa o lote intacto.

Ciclo de vida: ACTIVE → (harvest) → HARVESTED (terminal). Lotes despescados
permanecem no histórico, mas ficam fora dos cálculos ativos.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Tuple

from aquafarm.domain.entities.feed_requirement import FeedingRecord, FeedingRequirement
from aquafarm.domain.entities.fish_type import FishTypeParameters
from aquafarm.domain.entities.growth import GrowthRecord
from aquafarm.domain.enums import BatchStatus
from aquafarm.domain.errors import PreconditionError, ValidationError
from aquafarm.domain.services.feeding_calculation_service import FeedingCalculationService
from aquafarm.domain.services.growth_analysis_service import GrowthAnalysisService
from aquafarm.domain.value_objects import BatchStatistics, FishBatchId, WaterQuality, Weight

log = logging.getLogger("aquafarm.entities.batch")

_SECONDS_PER_DAY = 86400.0

_growth = GrowthAnalysisService()
_feeding = FeedingCalculationService()


def _utc(dt: Optional[datetime]) -> datetime:
    """Agora em UTC se `dt` for None; naive é assumido como UTC."""
    if dt is None:
        return datetime.now(timezone.utc)
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)


class FishBatch:
    """
    Lote de peixes.

    Attributes (somente leitura):
        id: Identificador do lote.
        fish_type_id: Espécie (chave do catálogo de parâmetros).
        stocked_date: Data de povoamento (UTC).
        initial_count / initial_weight: População e peso médio no povoamento.
        current_stats: Estatísticas atuais.
        growth_history / feeding_history: Históricos em ordem de registro.
        status: ACTIVE ou HARVESTED.
    """

    def __init__(
        self,
        batch_id: FishBatchId,
        fish_type_id: str,
        stocked_date: datetime,
        initial_count: int,
        initial_weight: Weight,
        current_stats: BatchStatistics,
        growth_history: Iterable[GrowthRecord] = (),
        feeding_history: Iterable[FeedingRecord] = (),
        status: BatchStatus = BatchStatus.ACTIVE,
    ) -> None:
        if not fish_type_id or not fish_type_id.strip():
            raise ValidationError("Espécie do lote não pode estar vazia.")
        if initial_count <= 0:
            raise ValidationError("População inicial do lote deve ser > 0.")
        self._id = batch_id
        self._fish_type_id = fish_type_id
        self._stocked_date = _utc(stocked_date)
        self._initial_count = initial_count
        self._initial_weight = initial_weight
        self._current_stats = current_stats
        self._growth_history: List[GrowthRecord] = list(growth_history)
        self._feeding_history: List[FeedingRecord] = list(feeding_history)
        self._status = status

    # -------------------------------------------------------------------------
    # Fábricas
    # -------------------------------------------------------------------------

    @classmethod
    def create(
        cls,
        batch_id: str,
        fish_type_id: str,
        fish_count: int,
        initial_weight: Weight,
        stocked_date: Optional[datetime] = None,
    ) -> "FishBatch":
        """Povoamento: novo lote ACTIVE com 100% de sobrevivência."""
        return cls(
            FishBatchId(batch_id),
            fish_type_id,
            _utc(stocked_date),
            fish_count,
            initial_weight,
            BatchStatistics(fish_count, initial_weight),
        )

    @classmethod
    def restore(
        cls,
        batch_id: str,
        fish_type_id: str,
        stocked_date: datetime,
        initial_count: int,
        initial_weight: Weight,
        current_stats: BatchStatistics,
        growth_history: Iterable[GrowthRecord] = (),
        feeding_history: Iterable[FeedingRecord] = (),
        status: BatchStatus = BatchStatus.ACTIVE,
    ) -> "FishBatch":
        """Reconstrói um lote a partir dos atributos persistidos."""
        return cls(FishBatchId(batch_id), fish_type_id, stocked_date, initial_count,
                   initial_weight, current_stats, growth_history, feeding_history, status)

    # -------------------------------------------------------------------------
    # Leitura
    # -------------------------------------------------------------------------

    @property
    def id(self) -> FishBatchId:
        return self._id

    @property
    def fish_type_id(self) -> str:
        return self._fish_type_id

    @property
    def stocked_date(self) -> datetime:
        return self._stocked_date

    @property
    def initial_count(self) -> int:
        return self._initial_count

    @property
    def initial_weight(self) -> Weight:
        return self._initial_weight

    @property
    def current_stats(self) -> BatchStatistics:
        return self._current_stats

    @property
    def status(self) -> BatchStatus:
        return self._status

    @property
    def growth_history(self) -> Tuple[GrowthRecord, ...]:
        return tuple(self._growth_history)

    @property
    def feeding_history(self) -> Tuple[FeedingRecord, ...]:
        return tuple(self._feeding_history)

    def is_active(self) -> bool:
        return self._status is BatchStatus.ACTIVE

    def days_in_culture(self, as_of: Optional[datetime] = None) -> int:
        """Dias (arredondados para cima) entre o povoamento e `as_of`."""
        delta = abs((_utc(as_of) - self._stocked_date).total_seconds())
        return math.ceil(delta / _SECONDS_PER_DAY)

    def latest_growth_record(self) -> Optional[GrowthRecord]:
        return self._growth_history[-1] if self._growth_history else None

    def total_feed_consumed(self) -> Weight:
        total = Weight.zero()
        for record in self._feeding_history:
            total = total + record.feed_amount
        return total

    # -------------------------------------------------------------------------
    # Regras de negócio
    # -------------------------------------------------------------------------

    def record_growth(self, new_average_weight: Weight, recorded_at: Optional[datetime] = None) -> GrowthRecord:
        """
        Registra uma biometria.

        SGR e ADG são calculados contra o peso inicial do povoamento (não
        contra a biometria anterior); `weight_gain_g` é o ganho desde a
        biometria anterior.

        Raises:
            PreconditionError: lote não ativo, biometria anterior ao povoamento
                ou no próprio dia do povoamento.
        """
        self._ensure_active("registrar crescimento")
        when = _utc(recorded_at)
        if when < self._stocked_date:
            raise PreconditionError(
                f"Biometria em {when.isoformat()} anterior ao povoamento do lote {self._id}."
            )
        days = self.days_in_culture(when)

        sgr = _growth.calculate_sgr(self._initial_weight, new_average_weight, days)
        adg = _growth.calculate_adg(self._initial_weight, new_average_weight, days)
        stats = self._current_stats.update_weight(new_average_weight)

        record = GrowthRecord(
            recorded_at=when,
            statistics=stats,
            weight_gain_g=new_average_weight.to_grams() - self._current_stats.average_weight.to_grams(),
            days_in_culture=days,
            sgr=sgr,
            adg=adg,
        )
        self._current_stats = stats
        self._growth_history.append(record)
        log.info("growth_recorded batch=%s days=%d avg_g=%.2f sgr=%.3f",
                 self._id, days, new_average_weight.to_grams(), sgr)
        return record

    def record_mortality(self, dead_count: int) -> None:
        """
        Desconta mortos da população e recalcula a sobrevivência.

        Raises:
            ValidationError: quantidade negativa.
            PreconditionError: lote não ativo ou mortos acima da população.
        """
        self._ensure_active("registrar mortalidade")
        if dead_count < 0:
            raise ValidationError("Quantidade de mortos não pode ser negativa.")
        if dead_count > self._current_stats.fish_count:
            raise PreconditionError(
                f"Mortos ({dead_count}) excedem a população atual ({self._current_stats.fish_count})."
            )
        self._current_stats = self._current_stats.record_mortality(dead_count, self._initial_count)
        log.info("mortality_recorded batch=%s dead=%d remaining=%d",
                 self._id, dead_count, self._current_stats.fish_count)

    def record_feeding(
        self,
        feed_amount: Weight,
        meals_per_day: int,
        water_quality: WaterQuality,
        feed_date: Optional[datetime] = None,
    ) -> FeedingRecord:
        self._ensure_active("alimentar")
        record = FeedingRecord(feed_amount, meals_per_day, _utc(feed_date), water_quality)
        self._feeding_history.append(record)
        return record

    def calculate_daily_feed(
        self,
        water_quality: WaterQuality,
        params: FishTypeParameters,
        feeding_service: Optional[FeedingCalculationService] = None,
    ) -> FeedingRequirement:
        """Necessidade diária do lote; zero e STOPPED se o lote não estiver ativo."""
        if not self.is_active():
            return FeedingRequirement.stopped()
        service = feeding_service or _feeding
        return service.calculate_daily_feed(
            self._current_stats.total_biomass(),
            self._current_stats.average_weight,
            water_quality,
            params,
        )

    def calculate_fcr(self, total_feed_consumed: Optional[Weight] = None) -> float:
        """
        FCR do lote: ração / (biomassa atual - biomassa do povoamento).
        Sem argumento usa a ração registrada no histórico.
        """
        feed = total_feed_consumed if total_feed_consumed is not None else self.total_feed_consumed()
        gain_g = (self._current_stats.total_biomass().to_grams()
                  - self._initial_weight.to_grams() * self._initial_count)
        if gain_g <= 0:
            raise PreconditionError("Biomassa do lote não aumentou desde o povoamento.")
        return _growth.calculate_fcr(feed, Weight.from_grams(gain_g))

    def harvest(self) -> None:
        self._ensure_active("despescar")
        self._status = BatchStatus.HARVESTED
        log.info("batch_harvested batch=%s fish=%d", self._id, self._current_stats.fish_count)

    # ---------- helpers ----------
    def _ensure_active(self, action: str) -> None:
        if not self.is_active():
            raise PreconditionError(f"Não é possível {action}: lote {self._id} não está ativo.")

    def __repr__(self) -> str:
        return (f"FishBatch(id={self._id!s}, fish_type={self._fish_type_id}, "
                f"status={self._status.name}, fish={self._current_stats.fish_count})")
