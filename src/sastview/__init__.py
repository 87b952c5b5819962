"""sastview — browse GitLab SAST reports from the terminal."""

__version__ = "0.1.0"
