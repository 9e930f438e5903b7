"""
FileSystemGate principal name handling.

Windows reports owners and groups as ``DOMAIN\\name``; other platforms report
bare names. Statuses always carry the bare form.
"""

import sys

# Separates the domain from the principal name in a Windows security identifier
WINDOWS_PRINCIPAL_DOMAIN_SEPARATOR = "\\"


def detect_windows(platform: str = sys.platform) -> bool:
    """Whether ``platform`` qualifies principal names with a domain."""
    return platform.startswith("win")


def remove_principal_domain(principal_name: str, is_windows: bool) -> str:
    """
    Strip a Windows domain prefix from a user or group name.

    Args:
        principal_name: The full user or group name
        is_windows: Whether names on this platform are domain-qualified

    Returns:
        The name without any domain portion
    """
    if not is_windows:
        return principal_name

    _, separator, name = principal_name.partition(WINDOWS_PRINCIPAL_DOMAIN_SEPARATOR)
    return name if separator else principal_name
