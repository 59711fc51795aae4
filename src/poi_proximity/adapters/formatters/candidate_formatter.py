"""Plain-text labels for ranked candidates."""

from decimal import ROUND_HALF_UP, Decimal

from poi_proximity.domain.models.candidate import Candidate
from poi_proximity.domain.models.ranked_result import RankedResult


class CandidateFormatter:
    """Formats candidates as 'Name (1.23 km)' labels for display."""

    def __init__(self, separator: str = ", ") -> None:
        self.separator = separator

    def format_distance(self, distance_km: float) -> str:
        """Format a distance in kilometres, rounded half-up to two decimals."""
        rounded = Decimal(repr(distance_km)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        return f"{rounded.normalize():f} km"

    def format_candidate(self, candidate: Candidate) -> str:
        return f"{candidate.display_name} ({self.format_distance(candidate.distance_km)})"

    def format_result(self, result: RankedResult) -> str:
        """Join all candidate labels; empty for empty or failed results."""
        return self.separator.join(self.format_candidate(c) for c in result.candidates)
