"""Core building blocks: configuration, logging, errors, models and the database layer."""
