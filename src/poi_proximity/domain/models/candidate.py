"""Candidate domain model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Candidate:
    """A single point of interest with its distance from the search origin."""

    identifier: str
    display_name: str
    distance_km: float
    link_target: str | None = None

    def __post_init__(self) -> None:
        if self.distance_km < 0:
            raise ValueError(f"distance_km must not be negative, got {self.distance_km}")

    @property
    def href(self) -> str:
        """Link for the candidate: its external website, else its identifier."""
        return self.link_target or self.identifier
