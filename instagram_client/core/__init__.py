"""Instagram client core: configuration, models and services."""
