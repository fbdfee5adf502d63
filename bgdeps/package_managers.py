"""Supported package managers and the files/commands they imply."""

import os
from enum import Enum
from typing import Mapping


class PackageManager(str, Enum):
    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"

    @property
    def lock_file(self) -> str:
        return _LOCK_FILES[self]

    @property
    def exec_command(self) -> str:
        """Executable used to run package binaries ad hoc."""
        return "npx" if self is PackageManager.NPM else self.value

    @property
    def install_command(self) -> str:
        return f"{self.value} install"

    @classmethod
    def parse(cls, value: "str | PackageManager") -> "PackageManager":
        """Return the member named by ``value`` (case-insensitive).

        Raises:
            ValueError: If ``value`` does not name a supported package manager
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            supported = ", ".join(pm.value for pm in cls)
            raise ValueError(
                f"Unsupported package manager: '{value}'. Supported: {supported}"
            ) from None

    def __str__(self) -> str:
        return self.value


_LOCK_FILES = {
    PackageManager.NPM: "package-lock.json",
    PackageManager.YARN: "yarn.lock",
    PackageManager.PNPM: "pnpm-lock.yaml",
}

LOCK_FILES: tuple[str, ...] = tuple(_LOCK_FILES[pm] for pm in PackageManager)

USER_AGENT_ENV = "npm_config_user_agent"


def detect_package_manager(
    environ: Mapping[str, str] | None = None,
    default: PackageManager = PackageManager.NPM,
) -> PackageManager:
    """Detect which package manager launched the current process.

    ``npm init``, ``yarn create`` and ``pnpm create`` all export a user agent
    such as ``pnpm/8.6.0 npm/? node/v18.16.0 linux x64``; the first token names
    the manager.
    """
    env = os.environ if environ is None else environ
    user_agent = env.get(USER_AGENT_ENV, "").strip()
    if not user_agent:
        return default

    name = user_agent.split(" ", 1)[0].split("/", 1)[0]
    try:
        return PackageManager.parse(name)
    except ValueError:
        return default


__all__ = [
    "PackageManager",
    "LOCK_FILES",
    "detect_package_manager",
]
