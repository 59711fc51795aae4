"""Formatters for presenting ranked results."""

from poi_proximity.adapters.formatters.candidate_formatter import CandidateFormatter
from poi_proximity.adapters.formatters.text_result_presenter import TextResultPresenter

__all__ = ["CandidateFormatter", "TextResultPresenter"]
