"""Commit planning rules, review output, a repository health check and a self-updating command line tool."""

__version__ = "0.1.0"