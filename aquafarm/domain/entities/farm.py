"""
Fazenda: raiz do agregado Farm → Tank → FishBatch.

Toda composição (inclusão/remoção de tanques, consolidado de ração e
estatísticas) passa por aqui. Os métodos não são sincronizados: quem chama
deve serializar as mutações de uma mesma fazenda.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Mapping, Optional

from aquafarm.domain.entities.feed_requirement import FarmFeedingRequirement, TankFeedingRequirement
from aquafarm.domain.entities.fish_type import FishTypeParameters
from aquafarm.domain.entities.tank import Tank
from aquafarm.domain.enums import SafetyStatus, TankStatus
from aquafarm.domain.errors import (
    EntityNotFoundError,
    MissingWaterQualityError,
    PreconditionError,
    ValidationError,
)
from aquafarm.domain.value_objects import FarmId, Weight

log = logging.getLogger("aquafarm.entities.farm")


@dataclass(frozen=True)
class FarmStatistics:
    """Totais dos tanques ativos e dos seus lotes ativos."""
    total_tanks: int
    active_tanks: int
    total_batches: int
    total_fish: int
    total_biomass: Weight

    def to_dict(self) -> dict:
        return {
            "total_tanks": self.total_tanks,
            "active_tanks": self.active_tanks,
            "total_batches": self.total_batches,
            "total_fish": self.total_fish,
            "total_biomass_kg": round(self.total_biomass.to_kilograms(), 3),
        }


class Farm:
    """
    Fazenda aquícola.

    Attributes (somente leitura):
        id: Identificador da fazenda.
        name / location: Nome e localização.
        tanks: Tanques em ordem de inclusão.
        created_at: Instante de criação (UTC).
    """

    def __init__(self, farm_id: FarmId, name: str, location: str,
                 tanks: Optional[Dict[str, Tank]] = None,
                 created_at: Optional[datetime] = None) -> None:
        if not name or not name.strip():
            raise ValidationError("Nome da fazenda não pode estar vazio.")
        self._id = farm_id
        self._name = name
        self._location = location
        self._tanks: Dict[str, Tank] = dict(tanks or {})
        self._created_at = created_at or datetime.now(timezone.utc)

    @classmethod
    def create(cls, farm_id: str, name: str, location: str,
               created_at: Optional[datetime] = None) -> "Farm":
        return cls(FarmId(farm_id), name, location, created_at=created_at)

    @classmethod
    def restore(cls, farm_id: str, name: str, location: str, created_at: datetime,
                tanks: Iterable[Tank] = ()) -> "Farm":
        """Reconstrói a fazenda a partir dos atributos persistidos."""
        return cls(FarmId(farm_id), name, location, {str(t.id): t for t in tanks}, created_at)

    @property
    def id(self) -> FarmId:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def location(self) -> str:
        return self._location

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def tanks(self) -> List[Tank]:
        return list(self._tanks.values())

    def get_tank(self, tank_id: str) -> Optional[Tank]:
        return self._tanks.get(tank_id)

    # -------- regras de negócio --------
    def add_tank(self, tank: Tank) -> None:
        key = str(tank.id)
        if key in self._tanks:
            raise PreconditionError(f"Tanque {key} já existe na fazenda {self._id}.")
        self._tanks[key] = tank

    def remove_tank(self, tank_id: str) -> Tank:
        """
        Raises:
            EntityNotFoundError: tanque não pertence à fazenda.
            PreconditionError: tanque ainda tem lotes ativos.
        """
        tank = self._tanks.get(tank_id)
        if tank is None:
            raise EntityNotFoundError(f"Tanque {tank_id} não encontrado na fazenda {self._id}.")
        if tank.active_batches():
            raise PreconditionError(f"Tanque {tank_id} ainda possui lotes ativos.")
        return self._tanks.pop(tank_id)

    def update_name(self, new_name: str) -> None:
        if not new_name or not new_name.strip():
            raise ValidationError("Nome da fazenda não pode estar vazio.")
        self._name = new_name

    def calculate_farm_daily_feed(
        self, fish_type_params: Mapping[str, FishTypeParameters]
    ) -> FarmFeedingRequirement:
        """
        Consolida a ração diária de todos os tanques ACTIVE.

        Tanques sem leitura de qualidade da água são ignorados (resultado
        parcial em vez de falha total); espécie ausente no catálogo falha a
        chamada inteira.
        """
        tank_reqs: List[TankFeedingRequirement] = []
        skipped: List[str] = []
        total = Weight.zero()

        for tank in self._tanks.values():
            if tank.status is not TankStatus.ACTIVE:
                continue
            try:
                req = tank.calculate_total_daily_feed(fish_type_params)
            except MissingWaterQualityError:
                log.warning("tank_skipped farm=%s tank=%s reason=no_water_quality", self._id, tank.id)
                skipped.append(str(tank.id))
                continue
            tank_reqs.append(req)
            total = total + req.total_daily_feed

        overall = SafetyStatus.worst(r.overall_status for r in tank_reqs)
        log.info("farm_feed farm=%s tanks=%d skipped=%d total_kg=%.3f status=%s",
                 self._id, len(tank_reqs), len(skipped), total.to_kilograms(), overall.name)

        return FarmFeedingRequirement(
            farm_id=str(self._id),
            total_daily_feed=total,
            tank_requirements=tuple(tank_reqs),
            overall_status=overall,
            skipped_tanks=tuple(skipped),
        )

    def farm_statistics(self) -> FarmStatistics:
        active_tanks = 0
        total_batches = 0
        total_fish = 0
        biomass = Weight.zero()

        for tank in self._tanks.values():
            if tank.status is not TankStatus.ACTIVE:
                continue
            active_tanks += 1
            biomass = biomass + tank.total_biomass()
            for batch in tank.active_batches():
                total_batches += 1
                total_fish += batch.current_stats.fish_count

        return FarmStatistics(
            total_tanks=len(self._tanks),
            active_tanks=active_tanks,
            total_batches=total_batches,
            total_fish=total_fish,
            total_biomass=biomass,
        )
