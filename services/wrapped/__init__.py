"""
Git Wrapped service for git-wrapped.

This service is responsible for:
- Reading commit history from a local Git repository
- Filtering commits by author email and calendar year
- Aggregating commit statistics in a single pass
- Formatting the yearly summary for the console
"""

__version__ = "1.0.0"
__author__ = "git-wrapped Team"
__description__ = "Yearly Git commit summary for a set of authors"
