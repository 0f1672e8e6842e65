"""
LeetCode daily sync.

Copies the day's accepted LeetCode submissions, with their source code
and problem statements, into Postgres.
"""

__version__ = "0.1.0"
