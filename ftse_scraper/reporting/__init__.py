"""Console reports."""
