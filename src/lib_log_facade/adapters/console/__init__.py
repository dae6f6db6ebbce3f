"""Console reporters."""
