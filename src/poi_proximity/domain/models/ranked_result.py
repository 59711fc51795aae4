"""Ranked result domain model."""

from collections.abc import Iterator
from dataclasses import dataclass, field

from poi_proximity.domain.models.candidate import Candidate
from poi_proximity.domain.models.error_details import ErrorDetails
from poi_proximity.domain.models.source_kind import SourceKind


@dataclass(frozen=True)
class RankedResult:
    """Candidates from one source, ordered by ascending distance.

    An empty result with ``error`` set means the source failed; an empty
    result without ``error`` means nothing was found nearby.
    """

    source: SourceKind
    candidates: tuple[Candidate, ...] = field(default_factory=tuple)
    error: ErrorDetails | None = None

    @property
    def is_empty(self) -> bool:
        return not self.candidates

    @property
    def failed(self) -> bool:
        return self.error is not None

    def identifiers(self) -> list[str]:
        return [candidate.identifier for candidate in self.candidates]

    def __len__(self) -> int:
        return len(self.candidates)

    def __iter__(self) -> Iterator[Candidate]:
        return iter(self.candidates)
