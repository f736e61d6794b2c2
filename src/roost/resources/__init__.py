"""Static resource registration, resolution and serving.

Submodules are imported directly (``roost.resources.registration``,
``roost.resources.handler``, ...); the common names are also exposed
lazily from the top-level ``roost`` package.
"""
