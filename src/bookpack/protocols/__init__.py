"""Protocol definitions for extensible components."""

from bookpack.protocols.ingester import Ingester
from bookpack.protocols.segmenter import SegmentationStrategy

__all__ = ["Ingester", "SegmentationStrategy"]
