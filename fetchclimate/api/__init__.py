"""FetchClimate service access."""
