"""
StormRank package
=================

Offline analysis of the NOAA Storm Database: which event types are the most
harmful to population health and which have the greatest economic cost.

- The CLI entry point is in `stormrank/cli.py`.
- Loading the CSV export is in `stormrank/loader.py`.
- Cleaning, damage resolution, aggregation and ranking live in
  `normalize.py`, `damage.py`, `aggregate.py` and `ranking.py`.
"""

__version__ = '0.1.0'
