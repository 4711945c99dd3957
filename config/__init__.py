"""Configuration for git-wrapped."""
