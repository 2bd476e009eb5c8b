"""ADLENS — Abstract AI Provider."""

from abc import ABC, abstractmethod
from typing import Optional


class AIProvider(ABC):
    """Abstract base for AI narrative generation.

    Providers consume a view's JSON (campaigns, daily series, totals) and
    return plain text. The dashboard works without AI.
    """

    @abstractmethod
    async def generate_summary(
        self, view_json: dict, question: Optional[str] = None
    ) -> str:
        """Generate a narrative summary of a dashboard view.

        Args:
            view_json: The view response as a dict.
            question: Optional question from the user. If None, produce a
                      general performance summary.

        Returns:
            A human-readable narrative string.
        """
        ...

    @abstractmethod
    def is_available(self) -> bool:
        """Check if this provider is configured and ready."""
        ...
