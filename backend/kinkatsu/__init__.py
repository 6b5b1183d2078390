"""Kinkatsu: personal workout log API."""
