"""Building blocks for a Lichess chess bot: API client, event parsing and streaming, clock management, opening-book helpers and PGN extraction."""

__version__ = "0.1.0"