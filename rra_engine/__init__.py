"""RRA turret hit-chance engine and combat-log analytics."""

__version__ = "0.1.0"
