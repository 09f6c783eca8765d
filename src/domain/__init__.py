"""Club rating domain."""
