"""clismith -- interactive scaffolder for oclif command-line projects."""

__version__ = "0.1.0"
