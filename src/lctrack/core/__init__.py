"""Core logic module.

Modules:
- id_resolver: URL slug -> LeetCode question ID via GraphQL
- attempts: rating enums and progress record lifecycle
- problem_bank: JSON problem bank loading and population
"""

__all__ = [
    "id_resolver",
    "attempts",
    "problem_bank",
]
