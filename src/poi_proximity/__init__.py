"""Nearby points-of-interest lookup over RDF graphs and SPARQL endpoints."""

__version__ = "0.1.0"
