"""Logic puzzle engine: generation, hint rules, candidates grid, message catalogues and resources."""

__version__ = "0.1.0"