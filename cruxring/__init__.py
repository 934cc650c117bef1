"""
cruxring: climbing acceleration sessions → move lists → ring geometry.

    from cruxring import Session, analyze, synthesize_rings

    session = Session.from_arrays(time, magnitude)
    moves = analyze(session)
    rings = synthesize_rings(moves)
"""

__version__ = "0.3.0"

from cruxring.errors import CruxRingError, DataError, GeometryError
from cruxring.config import AnalyzerSettings, VisualizerSettings
from cruxring.ingest import LiveSessionBuffer, Sample, Session
from cruxring.analysis import Move, MoveSet, MoveType, analyze, estimate_grade
from cruxring.geometry import RingGeometry, RingSet, synthesize_rings, update_materials
from cruxring.animation import ChangeKind, RingController, classify_change, perturb
from cruxring.pipeline import PipelineResult, run_pipeline

__all__ = [
    '__version__',
    'CruxRingError',
    'DataError',
    'GeometryError',
    'AnalyzerSettings',
    'VisualizerSettings',
    'LiveSessionBuffer',
    'Sample',
    'Session',
    'Move',
    'MoveSet',
    'MoveType',
    'analyze',
    'estimate_grade',
    'RingGeometry',
    'RingSet',
    'synthesize_rings',
    'update_materials',
    'ChangeKind',
    'RingController',
    'classify_change',
    'perturb',
    'PipelineResult',
    'run_pipeline',
]
