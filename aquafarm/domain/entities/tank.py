from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Optional

from aquafarm.domain.entities.feed_requirement import BatchFeedingRequirement, TankFeedingRequirement
from aquafarm.domain.entities.fish_batch import FishBatch
from aquafarm.domain.entities.fish_type import FishTypeParameters
from aquafarm.domain.enums import SafetyStatus, TankStatus
from aquafarm.domain.errors import (
    EntityNotFoundError,
    FishTypeNotFoundError,
    MissingWaterQualityError,
    PreconditionError,
    ValidationError,
)
from aquafarm.domain.value_objects import TankId, Volume, WaterQuality, Weight

log = logging.getLogger("aquafarm.entities.tank")


class Tank:
    """
    Representa um tanque de piscicultura.
    - Possui com exclusividade seus lotes (dict batch_id -> FishBatch)
    - Guarda a última leitura de qualidade da água (substituída por inteiro)
    - Transições de status protegidas por invariantes:
        EMPTY --add_batch--> ACTIVE --(último lote removido)--> EMPTY
        EMPTY/ACTIVE sem lotes --set_maintenance--> MAINTENANCE
        MAINTENANCE/EMPTY/ACTIVE --activate--> EMPTY ou ACTIVE (pela contagem de lotes)
        INACTIVE --activate--> erro
    """

    def __init__(
        self,
        tank_id: TankId,
        name: str,
        volume: Volume,
        batches: Optional[Dict[str, FishBatch]] = None,
        water_quality: Optional[WaterQuality] = None,
        status: TankStatus = TankStatus.EMPTY,
    ) -> None:
        if not name or not name.strip():
            raise ValidationError("Nome do tanque não pode estar vazio.")
        self._id = tank_id
        self._name = name
        self._volume = volume
        self._batches: Dict[str, FishBatch] = dict(batches or {})
        self._water_quality = water_quality
        self._status = status

    @classmethod
    def create(cls, tank_id: str, name: str, volume: Volume,
               status: TankStatus = TankStatus.EMPTY) -> "Tank":
        return cls(TankId(tank_id), name, volume, status=status)

    @classmethod
    def restore(cls, tank_id: str, name: str, volume: Volume, status: TankStatus,
                batches: Iterable[FishBatch] = (),
                water_quality: Optional[WaterQuality] = None) -> "Tank":
        """Reconstrói um tanque a partir dos atributos persistidos."""
        return cls(TankId(tank_id), name, volume,
                   {str(b.id): b for b in batches}, water_quality, status)

    # -------- leitura --------
    @property
    def id(self) -> TankId:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def volume(self) -> Volume:
        return self._volume

    @property
    def water_quality(self) -> Optional[WaterQuality]:
        return self._water_quality

    @property
    def status(self) -> TankStatus:
        return self._status

    @property
    def batches(self) -> List[FishBatch]:
        return list(self._batches.values())

    def get_batch(self, batch_id: str) -> Optional[FishBatch]:
        return self._batches.get(batch_id)

    def active_batches(self) -> List[FishBatch]:
        return [b for b in self._batches.values() if b.is_active()]

    # -------- regras de negócio --------
    def add_batch(self, batch: FishBatch) -> None:
        """
        Povoa o tanque com um lote.

        Raises:
            PreconditionError: tanque em MAINTENANCE/INACTIVE ou lote já presente.
        """
        if self._status not in (TankStatus.EMPTY, TankStatus.ACTIVE):
            raise PreconditionError(
                f"Não é possível adicionar lote ao tanque {self._id} em {self._status.name}."
            )
        key = str(batch.id)
        if key in self._batches:
            raise PreconditionError(f"Lote {key} já existe no tanque {self._id}.")
        self._batches[key] = batch
        if self._status is TankStatus.EMPTY:
            log.info("tank_status tank=%s from=%s to=%s", self._id, self._status.name, TankStatus.ACTIVE.name)
        self._status = TankStatus.ACTIVE

    def remove_batch(self, batch_id: str) -> FishBatch:
        if batch_id not in self._batches:
            raise EntityNotFoundError(f"Lote {batch_id} não encontrado no tanque {self._id}.")
        batch = self._batches.pop(batch_id)
        if not self._batches:
            log.info("tank_status tank=%s from=%s to=%s", self._id, self._status.name, TankStatus.EMPTY.name)
            self._status = TankStatus.EMPTY
        return batch

    def update_water_quality(self, water_quality: WaterQuality) -> None:
        self._water_quality = water_quality

    def set_maintenance(self) -> None:
        if self._batches:
            raise PreconditionError("Não é possível entrar em manutenção com lotes no tanque.")
        if self._status is TankStatus.INACTIVE:
            raise PreconditionError(f"Tanque {self._id} está inativo.")
        self._status = TankStatus.MAINTENANCE

    def activate(self) -> None:
        if self._status is TankStatus.INACTIVE:
            raise PreconditionError(f"Não é possível ativar o tanque inativo {self._id}.")
        self._status = TankStatus.ACTIVE if self._batches else TankStatus.EMPTY

    def total_biomass(self) -> Weight:
        """Biomassa dos lotes ativos."""
        total = Weight.zero()
        for batch in self.active_batches():
            total = total + batch.current_stats.total_biomass()
        return total

    def stocking_density(self) -> float:
        """Densidade de estocagem em kg/m³."""
        return self.total_biomass().to_kilograms() / self._volume.to_cubic_meters()

    def calculate_total_daily_feed(
        self, fish_type_params: Mapping[str, FishTypeParameters]
    ) -> TankFeedingRequirement:
        """
        Consolida a ração diária dos lotes ativos do tanque.

        Status geral: STOPPED domina WARNING, que domina OK.

        Raises:
            MissingWaterQualityError: tanque sem leitura de qualidade da água.
            FishTypeNotFoundError: espécie de algum lote ausente em `fish_type_params`.
        """
        if self._water_quality is None:
            raise MissingWaterQualityError(f"Tanque {self._id} sem leitura de qualidade da água.")

        requirements: List[BatchFeedingRequirement] = []
        total = Weight.zero()
        for batch in self.active_batches():
            params = fish_type_params.get(batch.fish_type_id)
            if params is None:
                raise FishTypeNotFoundError(f"Parâmetros da espécie não encontrados: {batch.fish_type_id}")
            req = batch.calculate_daily_feed(self._water_quality, params)
            requirements.append(BatchFeedingRequirement(str(batch.id), req))
            total = total + req.total_daily_feed

        overall = SafetyStatus.worst(r.requirement.safety_status for r in requirements)
        log.debug("tank_feed tank=%s batches=%d total_g=%.1f status=%s",
                  self._id, len(requirements), total.to_grams(), overall.name)

        return TankFeedingRequirement(
            tank_id=str(self._id),
            total_daily_feed=total,
            batch_requirements=tuple(requirements),
            overall_status=overall,
            water_quality=self._water_quality,
        )

    def to_dict(self) -> dict:
        """
        Serialização amigável para APIs/logs.
        - 'status' exportado como nome do enum
        - 'stocking_density_kg_m3' arredondada em 3 casas decimais
        """
        return {
            "id": str(self._id),
            "name": self._name,
            "volume_m3": self._volume.to_cubic_meters(),
            "status": self._status.name,
            "batches": list(self._batches.keys()),
            "total_biomass_kg": round(self.total_biomass().to_kilograms(), 3),
            "stocking_density_kg_m3": round(self.stocking_density(), 3),
            "water_quality": self._water_quality.to_dict() if self._water_quality else None,
        }
