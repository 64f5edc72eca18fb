"""Stellar Dynasties: two-player commit/reveal intrigue sessions."""
