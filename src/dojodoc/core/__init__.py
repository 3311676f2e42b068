"""Configuration and logging shared across :mod:`dojodoc`."""
