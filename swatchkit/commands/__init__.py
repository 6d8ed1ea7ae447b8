"""CLI commands.

Every module in this package that defines a `command` object is
auto-registered by swatchkit.registry.discover(). Its docstring is the
text printed by `swatchkit help <name>`.
"""
