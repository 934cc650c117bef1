"""
Full pipeline: session in, moves and rings out.

    session → analyze → synthesize_rings → PipelineResult

Every run is fresh; nothing is cached between calls.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from cruxring.analysis.analyzer import analyze
from cruxring.analysis.moves import MoveSet
from cruxring.config import AnalyzerSettings, VisualizerSettings
from cruxring.geometry.rings import RingSet, synthesize_rings
from cruxring.ingest.session import as_session

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineResult:
    moves: MoveSet
    rings: RingSet
    move_count: int      # centre label value; the renderer decides how to show it

    @property
    def insufficient_data(self) -> bool:
        return self.rings.insufficient_data


def run_pipeline(
    session,
    analyzer_settings: Optional[AnalyzerSettings] = None,
    visualizer_settings: Optional[VisualizerSettings] = None,
) -> PipelineResult:
    """
    Run analysis and ring synthesis.

    Args:
        session: Session, polars DataFrame with time/magnitude columns,
            or an iterable of (time, magnitude) pairs.
        analyzer_settings: Move detection settings.
        visualizer_settings: Ring synthesis settings.

    Raises:
        DataError: the session cannot be analyzed.
    """
    session = as_session(session)
    moves = analyze(session, analyzer_settings)
    rings = synthesize_rings(moves, visualizer_settings)

    logger.info(
        "pipeline: %d samples → %d moves → %d rings",
        len(session), len(moves), rings.successful,
    )
    return PipelineResult(moves=moves, rings=rings, move_count=len(moves))
