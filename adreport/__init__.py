"""Ad keyword report dashboard: parse, summarise and explore campaign exports."""

__version__ = "0.1.0"
