"""
Generators — render a ConstantsDocument into source text.

Each generator module exposes a ``render_*()`` function that takes a
``ConstantsDocument`` and returns the full file content as a string.
"""
