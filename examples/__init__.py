"""Example simulations built on doublebuffer.

This package demonstrates library usage but is not part of the core API.
"""
