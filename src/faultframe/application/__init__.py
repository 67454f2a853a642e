"""Application layer: pipeline services and reporters."""
