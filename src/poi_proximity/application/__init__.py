"""Application layer - query construction and proximity resolution."""
