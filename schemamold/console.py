"""Shared Rich console instances for SchemaMold.

All modules should import console from here instead of creating their own
Console() instances, ensuring consistent output behavior.
"""

from rich.console import Console

console = Console()
err_console = Console(stderr=True)


def apply_color_setting(color: str) -> None:
    """Apply the ``output.color`` setting (auto or never) to both consoles."""
    if color == "never":
        console.no_color = True
        err_console.no_color = True
