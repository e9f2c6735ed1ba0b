"""Per-dimension metric scorers. Each is a pure function of its inputs."""
