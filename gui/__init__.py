"""Headless GUI layer: controllers, view models and the app shell.

These modules avoid hard dependencies on a display server so they can be
imported in headless test runs; ``gui.app.main`` drives them from a terminal.
"""
