"""
lc_meta: Report what Log Cache is holding.

Queries the Log Cache meta endpoint and prints, per source, the record and
expired counts and the time span covered by cached records.
"""

__version__ = "0.1.0"
