"""
Release Aggregation - merged release metadata from GitHub Atom feeds.

This package fetches a fixed set of release feeds, extracts structured
release fields from each entry, and serves the merged list over HTTP.
"""

__version__ = "0.1.0"
