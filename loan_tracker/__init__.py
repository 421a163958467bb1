"""Short-term loan tracking: clients, loans, expenses and derived dashboards."""

__version__ = "0.1.0"
