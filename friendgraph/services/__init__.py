"""Service layer - friendship rules and storage."""
