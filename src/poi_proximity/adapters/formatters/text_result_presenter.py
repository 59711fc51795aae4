"""Presenter that writes ranked results as plain text."""

import sys
from typing import TextIO

from poi_proximity.adapters.formatters.candidate_formatter import CandidateFormatter
from poi_proximity.domain.models.ranked_result import RankedResult
from poi_proximity.domain.ports.result_presenter import ResultPresenter


class TextResultPresenter(ResultPresenter):
    """Writes one block per source: a heading, then one line per candidate."""

    def __init__(
        self,
        stream: TextIO | None = None,
        formatter: CandidateFormatter | None = None,
        show_links: bool = True,
    ) -> None:
        self._stream = stream or sys.stdout
        self._formatter = formatter or CandidateFormatter()
        self._show_links = show_links

    def render(self, result: RankedResult) -> list[str]:
        """Return the lines for one result without writing them."""
        lines = [f"{result.source.value}:"]
        if result.failed and result.error is not None:
            lines.append(f"  (unavailable: {result.error.reason})")
        elif result.is_empty:
            lines.append("  (nothing nearby)")
        else:
            for candidate in result:
                label = self._formatter.format_candidate(candidate)
                lines.append(f"  {label}  {candidate.href}" if self._show_links else f"  {label}")
        return lines

    async def present(self, result: RankedResult) -> None:
        self._stream.write("\n".join(self.render(result)) + "\n")
