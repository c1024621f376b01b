"""HTTP surface for the result visualization engine."""
