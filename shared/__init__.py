"""Models and errors shared by the git-wrapped services."""
