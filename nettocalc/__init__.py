"""netto-calc - German wage tax and net salary calculator."""

__version__ = "0.1.0"
