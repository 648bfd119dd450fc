"""Domain layer - exposure limit value objects and services."""
