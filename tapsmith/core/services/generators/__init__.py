"""
Generators — produce tap files from named fields.

Each generator module exposes a ``generate_*()`` function that returns
a ``GeneratedFile``. Generators never write to disk.
"""
