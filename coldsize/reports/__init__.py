"""Report generation for ColdSize."""
