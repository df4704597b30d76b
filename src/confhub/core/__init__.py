"""Cross-cutting infrastructure shared by the API and service layers."""
