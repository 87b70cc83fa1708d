"""YAML-backed tax year configuration."""
