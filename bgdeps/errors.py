"""Error formatting utilities for consistent error messages.

Error Style Guide:
- User-facing errors use 'Error: ' prefix
- Use present tense: 'must be', 'is required'
- Include actionable hints where helpful
"""

import click

from .package_managers import PackageManager


def format_error(message: str) -> str:
    """Format an error message with consistent prefix.

    Examples:
        >>> format_error("source directory not found")
        'Error: source directory not found'
    """
    return f"Error: {message}"


def format_suggestion(message: str, suggestion: str) -> str:
    """Format an error message with a helpful suggestion.

    Examples:
        >>> format_suggestion("unknown package manager 'bun'", "use npm, yarn or pnpm")
        "Error: unknown package manager 'bun'. Hint: use npm, yarn or pnpm"
    """
    return f"{format_error(message)}. Hint: {suggestion}"


def format_install_failure(package_manager: "PackageManager | str") -> str:
    """Format the block shown when the automatic install fails.

    The banner and command are styled; click strips the styling when the
    output is not a terminal, leaving the plain text.
    """
    pm = PackageManager.parse(package_manager)
    banner = click.style(f"  {pm.install_command} failed  ", bg="red")
    command = click.style(pm.install_command, fg="green")
    return (
        f"\n\n{banner}\n"
        f'  Automatic install failed. "{command}" must be manually executed to install deps.\n'
    )


__all__ = [
    "format_error",
    "format_suggestion",
    "format_install_failure",
]
