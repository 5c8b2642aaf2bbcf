"""HTTP surface of the documentation gateway."""
