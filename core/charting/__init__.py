"""Chart rendering helpers.

This package turns fetched benchmark rows into Chart.js payloads, statistics
cards and legend entries used by the project view.
"""
