"""FIRST/FOLLOW set analysis over a Grammar."""

from .first_follow import FFResult, first, follow, compute_sets
