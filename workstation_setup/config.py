from __future__ import annotations

import copy
import getpass
import re
import socket
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from .errors import ConfigError

DEFAULT_APT_PACKAGES = [
    "build-essential",
    "g++",
    "clang-format",
    "curl",
    "git",
    "openssh-client",
    "make",
    "libssl-dev",
    "zlib1g-dev",
    "libbz2-dev",
    "libreadline-dev",
    "libsqlite3-dev",
    "libffi-dev",
    "liblzma-dev",
]

EMAIL_LOCAL_PART = r"[A-Za-z0-9._%+-]+"
ANY_EMAIL_PATTERN = EMAIL_LOCAL_PART + r"@[A-Za-z0-9.-]+\.[A-Za-z]{2,}"

DEFAULT_SECURITY_TOOLS = [
    {
        "name": "trivy",
        "installer_url": "https://raw.githubusercontent.com/aquasecurity/trivy/main/contrib/install.sh",
        "binary": "trivy",
    },
    {
        "name": "grype",
        "installer_url": "https://raw.githubusercontent.com/anchore/grype/main/install.sh",
        "binary": "grype",
    },
]


def _section(raw: Dict[str, Any], key: str) -> Dict[str, Any]:
    # "git:" with only commented children loads as None.
    value = raw.get(key)
    if value is None:
        value = {}
    if not isinstance(value, dict):
        raise ConfigError(f"config section {key!r} must be a mapping, got {type(value).__name__}")
    raw[key] = value
    return value


def ensure_defaults(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Fill required keys with sane defaults (without overriding user values)."""

    raw.setdefault("home", None)
    raw.setdefault("profile", "~/.bashrc")
    raw.setdefault("local_bin", "~/.local/bin")
    raw.setdefault("editor", "code")
    raw.setdefault("linter_config", "~/.flake8")
    raw.setdefault("formatter_config", "~/.clang-format")
    raw.setdefault("python_tools", ["pip", "flake8", "black"])
    raw.setdefault("security_tools", copy.deepcopy(DEFAULT_SECURITY_TOOLS))

    apt = _section(raw, "apt")
    apt.setdefault("packages", list(DEFAULT_APT_PACKAGES))
    apt.setdefault("sudo", True)

    pyenv = _section(raw, "pyenv")
    pyenv.setdefault("root", "~/.pyenv")
    pyenv.setdefault("installer_url", "https://pyenv.run")
    pyenv.setdefault("python_version", "3.12.4")

    ssh = _section(raw, "ssh")
    ssh.setdefault("dir", "~/.ssh")
    ssh.setdefault("key_type", "ed25519")
    ssh.setdefault("comment", None)
    ssh.setdefault("auth_key", "id_ed25519")
    ssh.setdefault("signing_key", "id_ed25519_signing")

    git = _section(raw, "git")
    # name: a literal value, or None to prompt against name_pattern.
    git.setdefault("name", None)
    git.setdefault("name_pattern", r"\S.*")
    # email_pattern wins; otherwise addresses are restricted to email_domain.
    git.setdefault("email_domain", "example.com")
    git.setdefault("email_pattern", None)
    git.setdefault("default_branch", "main")
    git.setdefault("sign", True)

    tc = _section(raw, "toolchain")
    tc.setdefault("scratch_dir", "~/scratch/toolchain-check")
    tc.setdefault("compiler", "g++")
    tc.setdefault("formatter", "clang-format")

    return raw


@dataclass(frozen=True)
class ProvisionConfig:
    raw: Dict[str, Any]

    @classmethod
    def from_mapping(cls, raw: Optional[Dict[str, Any]] = None) -> "ProvisionConfig":
        return cls(raw=ensure_defaults(copy.deepcopy(raw or {})))

    @property
    def home(self) -> Path:
        return Path(str(self.raw.get("home") or Path.home()))

    def path(self, value: str) -> Path:
        """Expand a configured path; ``~`` refers to the configured home."""
        s = str(value)
        if s == "~":
            return self.home
        if s.startswith("~/"):
            return self.home / s[2:]
        return Path(s)

    @property
    def profile(self) -> Path:
        return self.path(self.raw["profile"])

    @property
    def local_bin(self) -> Path:
        return self.path(self.raw["local_bin"])

    @property
    def editor(self) -> Optional[str]:
        return self.raw.get("editor") or None

    @property
    def linter_config(self) -> Path:
        return self.path(self.raw["linter_config"])

    @property
    def formatter_config(self) -> Path:
        return self.path(self.raw["formatter_config"])

    @property
    def python_tools(self) -> List[str]:
        return [str(t) for t in (self.raw.get("python_tools") or [])]

    @property
    def security_tools(self) -> List[Dict[str, str]]:
        tools = self.raw.get("security_tools") or []
        for t in tools:
            if not isinstance(t, dict) or not t.get("name") or not t.get("installer_url"):
                raise ConfigError(f"security_tools entries need name and installer_url: {t!r}")
        return [
            {
                "name": str(t["name"]),
                "installer_url": str(t["installer_url"]),
                "binary": str(t.get("binary") or t["name"]),
            }
            for t in tools
        ]

    @property
    def apt_packages(self) -> List[str]:
        return [str(p) for p in ((self.raw.get("apt") or {}).get("packages") or [])]

    @property
    def apt_sudo(self) -> bool:
        return bool((self.raw.get("apt") or {}).get("sudo", True))

    @property
    def pyenv_root(self) -> Path:
        return self.path(self.raw["pyenv"]["root"])

    @property
    def pyenv_bin(self) -> Path:
        return self.pyenv_root / "bin" / "pyenv"

    @property
    def pyenv_installer_url(self) -> str:
        return str(self.raw["pyenv"]["installer_url"])

    @property
    def python_version(self) -> str:
        return str(self.raw["pyenv"]["python_version"])

    @property
    def ssh_dir(self) -> Path:
        return self.path(self.raw["ssh"]["dir"])

    @property
    def ssh_key_type(self) -> str:
        return str(self.raw["ssh"]["key_type"])

    @property
    def ssh_comment(self) -> str:
        comment = self.raw["ssh"].get("comment")
        if comment:
            return str(comment)
        return f"{getpass.getuser()}@{socket.gethostname()}"

    @property
    def ssh_auth_key(self) -> Path:
        return self.ssh_dir / str(self.raw["ssh"]["auth_key"])

    @property
    def ssh_signing_key(self) -> Path:
        return self.ssh_dir / str(self.raw["ssh"]["signing_key"])

    @property
    def git_name(self) -> Optional[str]:
        return self.raw["git"].get("name") or None

    @property
    def git_name_pattern(self) -> str:
        return str(self.raw["git"]["name_pattern"])

    @property
    def git_email_pattern(self) -> str:
        git = self.raw["git"]
        if git.get("email_pattern"):
            return str(git["email_pattern"])
        if git.get("email_domain"):
            return EMAIL_LOCAL_PART + "@" + re.escape(str(git["email_domain"]))
        return ANY_EMAIL_PATTERN

    @property
    def git_default_branch(self) -> str:
        return str(self.raw["git"]["default_branch"])

    @property
    def git_sign(self) -> bool:
        return bool(self.raw["git"].get("sign", True))

    @property
    def scratch_dir(self) -> Path:
        return self.path(self.raw["toolchain"]["scratch_dir"])

    @property
    def compiler(self) -> str:
        return str(self.raw["toolchain"]["compiler"])

    @property
    def formatter(self) -> str:
        return str(self.raw["toolchain"]["formatter"])


def load_config(path: Optional[str]) -> ProvisionConfig:
    """Load a YAML config file; None gives the defaults."""

    if path is None:
        return ProvisionConfig.from_mapping({})

    p = Path(path)
    if not p.exists():
        raise ConfigError(f"Config file not found: {path}")

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ConfigError("config must be YAML")

    try:
        import yaml  # type: ignore
    except Exception as e:  # pragma: no cover
        raise RuntimeError("PyYAML is required to read the config file") from e

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError("config must contain a mapping/object")

    return ProvisionConfig.from_mapping(raw)
