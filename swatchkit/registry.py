"""Command auto-discovery and registration.

Scans swatchkit/commands/ for modules that define a `command` object of
type Command and collects them into a dict keyed by command name. Modules
whose name starts with an underscore are private helpers and skipped.
"""

import importlib
import pkgutil

from swatchkit.core.types import Command

_registry: dict[str, Command] = {}


def discover() -> dict[str, Command]:
    """Import all command modules and return the registry."""
    if _registry:
        return _registry

    import swatchkit.commands as pkg

    for module_info in pkgutil.iter_modules(pkg.__path__):
        if module_info.name.startswith('_'):
            continue
        module = importlib.import_module(f'{pkg.__name__}.{module_info.name}')
        cmd = getattr(module, 'command', None)
        if isinstance(cmd, Command):
            _registry[cmd.name] = cmd

    return _registry


def get(name: str) -> Command:
    """Get a command by name."""
    reg = discover()
    if name not in reg:
        raise KeyError(f'Unknown command: {name}. Available: {", ".join(sorted(reg))}')
    return reg[name]


def all_commands() -> dict[str, Command]:
    """Return all registered commands."""
    return discover()
