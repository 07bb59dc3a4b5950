"""Feed briefing: grounded reports and chat over syndicated content."""

__version__ = "0.1.0"
