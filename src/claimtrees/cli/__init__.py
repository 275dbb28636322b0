"""Command-line client for the claimtrees API."""
