"""Infrastructure layer: interpreter stacks and filesystem access."""
