from cruxring.ingest.session import Sample, Session, as_session
from cruxring.ingest.live_buffer import LiveSessionBuffer

__all__ = [
    "Sample",
    "Session",
    "as_session",
    "LiveSessionBuffer",
]
