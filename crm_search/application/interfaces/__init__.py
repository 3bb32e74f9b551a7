"""Ports (protocols) implemented by infrastructure."""
