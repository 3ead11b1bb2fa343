"""Protocol for text segmentation strategies."""

from typing import Protocol, runtime_checkable

from bookpack.models import Document


@runtime_checkable
class SegmentationStrategy(Protocol):
    """Protocol for text segmentation strategies.

    Different strategies can be used for different kinds of books.
    """

    def segment(self, text: str) -> Document:
        """Split text into an ordered Document of chapters."""
        ...
