"""swatchkit.core — Foundation layer.

Contains the pixel buffer and colour types, palette extraction, the .ase
codec, region extraction and the report builder. This module has NO
dependencies on swatchkit.commands or swatchkit.registry.
Only stdlib, numpy, and PIL are allowed here.
"""
