"""KML overlay request client: query building, single-shot fetch, page rendering."""

__version__ = "0.1.0"
