"""Configuration, security and error primitives shared across Piazza."""
