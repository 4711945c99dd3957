"""git-wrapped services."""
