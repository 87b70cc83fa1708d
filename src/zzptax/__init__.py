"""Tax tooling for Dutch sole proprietors."""
