"""
Dating compatibility scoring for SNU Hangout.

This package implements the matchmaking score used by the dating module:
two users' questionnaire answers go in, a normalized compatibility score
and a per-category breakdown come out.

Key Design Decisions:
- Questions are grouped into weighted categories with inclusion thresholds
- Near-miss answers earn partial credit from a curated similarity table
- Categories below their threshold are left out of the weighted average
- All questionnaire configuration is validated once, at load time
"""

__version__ = "1.0.0"
