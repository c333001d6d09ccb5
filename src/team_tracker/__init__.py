"""Team tracker backend: locations, teams, assignments and the visit ledger."""

__version__ = "0.1.0"
