"""Fill unfilled pull request templates from the PR diff."""

__version__ = "0.1.0"
