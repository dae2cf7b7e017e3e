"""Helpers for the US weather events walkthrough app."""
