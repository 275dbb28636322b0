"""HTTP API for the claim/evidence graph."""
