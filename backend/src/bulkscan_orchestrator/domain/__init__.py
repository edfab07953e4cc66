"""Domain layer: models and ports, free of transport concerns."""
