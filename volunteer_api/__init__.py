"""Volunteer platform API."""
