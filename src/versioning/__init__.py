"""Scala and plugin version handling."""
