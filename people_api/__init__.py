"""HTTP service for managing people, enriched with age, gender and nationality by first name."""

__version__ = "1.0.0"