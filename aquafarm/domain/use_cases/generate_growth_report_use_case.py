# aquafarm/domain/use_cases/generate_growth_report_use_case.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional
import logging

import pandas as pd

from aquafarm.domain.entities.fish_batch import FishBatch
from aquafarm.domain.entities.fish_type import FishTypeParameters
from aquafarm.domain.entities.growth import GrowthPerformance
from aquafarm.domain.services.growth_analysis_service import GrowthAnalysisService
from aquafarm.domain.value_objects import Weight

log = logging.getLogger("aquafarm.usecases.growth_report")

GROWTH_COLUMNS = [
    "recorded_at", "days_in_culture", "average_weight_g", "fish_count",
    "survival_rate", "biomass_kg", "weight_gain_g", "sgr", "adg",
]
FEEDING_COLUMNS = ["date", "feed_kg", "meals"]

@dataclass(frozen=True)
class GrowthReport:
    """
    DTO imutável para retorno do caso de uso.

    Atributos:
        growth: DataFrame com uma linha por biometria (colunas GROWTH_COLUMNS).
        feeding: DataFrame com a ração total por dia (colunas FEEDING_COLUMNS).
        summary: dicionário com os totais do lote. Chaves:
            - 'batch_id', 'status', 'records', 'days_in_culture'
            - 'average_weight_g', 'fish_count', 'survival_rate', 'biomass_kg'
            - 'total_feed_kg', 'latest_sgr', 'mean_adg'
        performance: avaliação de desempenho, quando há ganho e ração registrada.
    """
    growth: pd.DataFrame
    feeding: pd.DataFrame
    summary: Dict[str, Any]
    performance: Optional[GrowthPerformance] = None

class GenerateGrowthReportUseCase:
    """
    Tabela o histórico de biometria e alimentação de um lote e avalia o
    desempenho contra as referências da espécie.
    """

    def __init__(self, growth_service: Optional[GrowthAnalysisService] = None) -> None:
        self.growth_service = growth_service or GrowthAnalysisService()

    def execute(self, batch: FishBatch, params: FishTypeParameters,
                protein_percentage: float = 32.0) -> GrowthReport:
        """
        Gera o relatório de um lote.

        Args:
            batch: Lote a relatar (ativo ou despescado).
            params: Parâmetros da espécie do lote.
            protein_percentage: Teor de proteína da ração (%), para o PER.

        Returns:
            GrowthReport com os DataFrames, o resumo e, se possível, a
            avaliação de desempenho (ração por peixe = total / população atual).
        """
        growth = pd.DataFrame(
            [
                {
                    "recorded_at": r.recorded_at,
                    "days_in_culture": r.days_in_culture,
                    "average_weight_g": r.statistics.average_weight.to_grams(),
                    "fish_count": r.statistics.fish_count,
                    "survival_rate": r.statistics.survival_rate,
                    "biomass_kg": r.statistics.total_biomass().to_kilograms(),
                    "weight_gain_g": r.weight_gain_g,
                    "sgr": r.sgr,
                    "adg": r.adg,
                }
                for r in batch.growth_history
            ],
            columns=GROWTH_COLUMNS,
        )

        feeding = self._daily_feeding(batch)
        stats = batch.current_stats
        total_feed = batch.total_feed_consumed()
        latest = batch.latest_growth_record()

        summary = {
            "batch_id": str(batch.id),
            "status": batch.status.name,
            "records": len(growth),
            "days_in_culture": latest.days_in_culture if latest else 0,
            "average_weight_g": stats.average_weight.to_grams(),
            "fish_count": stats.fish_count,
            "survival_rate": round(stats.survival_rate, 2),
            "biomass_kg": round(stats.total_biomass().to_kilograms(), 3),
            "total_feed_kg": round(total_feed.to_kilograms(), 3),
            "latest_sgr": round(latest.sgr, 3) if latest else None,
            "mean_adg": round(float(growth["adg"].mean()), 3) if not growth.empty else None,
        }

        performance = None
        gained = stats.average_weight.to_grams() > batch.initial_weight.to_grams()
        if latest and gained and total_feed.to_grams() > 0 and stats.fish_count > 0:
            feed_per_fish = Weight.from_grams(total_feed.to_grams() / stats.fish_count)
            metrics = self.growth_service.calculate_growth_metrics(
                batch.initial_weight, stats.average_weight, latest.days_in_culture,
                feed_per_fish, protein_percentage,
            )
            performance = self.growth_service.evaluate_performance(metrics, params)

        log.info("growth_report_generated batch=%s records=%s feed_days=%s",
                 summary["batch_id"], summary["records"], len(feeding))
        return GrowthReport(growth=growth, feeding=feeding, summary=summary, performance=performance)

    # ---------- helpers ----------
    @staticmethod
    def _daily_feeding(batch: FishBatch) -> pd.DataFrame:
        """Soma a ração por dia de calendário (UTC)."""
        raw = pd.DataFrame(
            [
                {
                    "date": r.feed_date.date(),
                    "feed_kg": r.feed_amount.to_kilograms(),
                    "meals": r.meals_per_day,
                }
                for r in batch.feeding_history
            ],
            columns=FEEDING_COLUMNS,
        )
        if raw.empty:
            return raw
        return (
            raw.groupby("date", as_index=False)
               .agg(feed_kg=("feed_kg", "sum"), meals=("meals", "max"))
               .sort_values("date")
               .reset_index(drop=True)
        )
