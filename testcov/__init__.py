"""testcov: aggregate line coverage and a badge for a package's test entry points."""

__version__ = "0.3.0"
