"""
Lease Calculation Engine

Core calculation modules for IFRS 16 lease liability accounting.
All calculations are pure functions of the supplied contract.
"""

from app.calculations import lease, modifications, present_value, schedule

__all__ = ["lease", "modifications", "present_value", "schedule"]
