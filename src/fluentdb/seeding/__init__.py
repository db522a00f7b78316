"""Seeders: idempotent baseline data loaded by name."""

from .seeder import SeedResult, Seeder, discover_seeders, run_seeders

__all__ = [
    "SeedResult",
    "Seeder",
    "discover_seeders",
    "run_seeders",
]
