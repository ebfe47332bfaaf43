"""Seed data for the sample schema."""

from sqlsamples.seed.data import DOCUMENT_ROWS, SEED_ROWS, SeedTable
from sqlsamples.seed.loader import load_rows, render_seed_script, row_counts, seed_all

__all__ = [
    "DOCUMENT_ROWS",
    "SEED_ROWS",
    "SeedTable",
    "load_rows",
    "render_seed_script",
    "row_counts",
    "seed_all",
]
