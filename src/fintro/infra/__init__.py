"""Infrastructure: database wiring, repositories and the change feed."""
