"""Scenarios for generating demo loan books."""

from loan_tracker.scenarios.demo_book import DemoBookScenario

__all__ = ["DemoBookScenario"]
