"""Result presenter port."""

from typing import Protocol

from poi_proximity.domain.models.ranked_result import RankedResult


class ResultPresenter(Protocol):
    """Port for handing ranked results to whatever displays them."""

    async def present(self, result: RankedResult) -> None:
        """Present one source's ranked result, or its empty/failed state."""
        ...
