"""City recipes service."""
