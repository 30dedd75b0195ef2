"""Common constants shared across models."""

NO_DATA = "No data"
