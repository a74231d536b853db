"""Casos de uso do gateway."""
