"""Domain layer: value types and protocols shared by all layers."""
