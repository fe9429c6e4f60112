"""Environment-driven settings for the benchmark exporters."""
