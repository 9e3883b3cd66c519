"""Shared test fixtures.

External commands never run for real: ``subprocess.run`` is replaced by a
recording fake so tests can script tool behaviour and inspect what ran.
"""

import subprocess
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple, Union

import pytest

from workstation_setup.config import ProvisionConfig
from workstation_setup.lib import command
from workstation_setup.pipeline import RunContext

Response = Union[None, int, Tuple[int, str]]


class FakeShell:
    def __init__(self) -> None:
        self.calls: List[List[str]] = []
        self.envs: List[dict] = []
        self.kwargs: List[dict] = []
        self.missing: set = set()
        self._handlers: list = []

    def on(
        self,
        *prefix: str,
        returncode: int = 0,
        stdout: str = "",
        stderr: str = "",
        effect: Optional[Callable[[List[str]], Response]] = None,
    ) -> None:
        """Script a response for commands starting with ``prefix``.

        ``effect`` runs on every matching call. It may return None (use the
        static values), a return code, or a ``(returncode, stdout)`` pair.
        Later registrations win.
        """
        self._handlers.append((list(prefix), returncode, stdout, stderr, effect))

    def __call__(self, argv: Sequence[str], **kwargs) -> subprocess.CompletedProcess:
        argv = list(argv)
        if argv[0] in self.missing:
            raise FileNotFoundError(argv[0])
        self.calls.append(argv)
        self.envs.append(kwargs.get("env") or {})
        self.kwargs.append(kwargs)
        for prefix, rc, out, err, effect in reversed(self._handlers):
            if argv[: len(prefix)] != prefix:
                continue
            if effect is not None:
                response = effect(argv)
                if isinstance(response, tuple):
                    rc, out = response
                elif response is not None:
                    rc = response
            return subprocess.CompletedProcess(argv, rc, out, err)
        return subprocess.CompletedProcess(argv, 0, "", "")

    def ran(self, *prefix: str) -> List[List[str]]:
        return [c for c in self.calls if c[: len(prefix)] == list(prefix)]


@pytest.fixture
def shell(monkeypatch) -> FakeShell:
    fake = FakeShell()
    monkeypatch.setattr(command.subprocess, "run", fake)
    monkeypatch.setattr(command.shutil, "which", lambda name: None)
    return fake


class FakeGitConfig:
    """In-memory ``git config --global`` wired into a FakeShell."""

    def __init__(self, shell: FakeShell, initial: Optional[dict] = None) -> None:
        self.values = dict(initial or {})
        self.writes: List[Tuple[str, str]] = []
        shell.on("git", "config", "--global", effect=self._handle)

    def _handle(self, argv: List[str]) -> Response:
        rest = argv[3:]
        if rest[0] == "--get":
            key = rest[1]
            if key not in self.values:
                return 1, ""
            return 0, self.values[key] + "\n"
        key, value = rest
        self.values[key] = value
        self.writes.append((key, value))
        return 0


@pytest.fixture
def git_config(shell) -> FakeGitConfig:
    return FakeGitConfig(shell)


@pytest.fixture
def cfg(tmp_path) -> ProvisionConfig:
    """Config rooted at a temporary home directory."""
    return ProvisionConfig.from_mapping(
        {
            "home": str(tmp_path / "home"),
            "editor": None,
            "ssh": {"comment": "dev@workstation"},
        }
    )


def no_prompt(prompt: str) -> str:
    raise AssertionError(f"unexpected prompt: {prompt}")


@pytest.fixture
def ctx(cfg) -> RunContext:
    return RunContext(cfg=cfg, input_fn=no_prompt)


def scripted_input(answers: Sequence[str]):
    """An input_fn returning ``answers`` in order and recording prompts."""
    remaining = list(answers)
    prompts: List[str] = []

    def _input(prompt: str) -> str:
        prompts.append(prompt)
        if not remaining:
            raise EOFError("no more scripted answers")
        return remaining.pop(0)

    _input.prompts = prompts  # type: ignore[attr-defined]
    return _input


def keygen_effect(argv: List[str]) -> None:
    """Make a fake ssh-keygen create its key files."""
    path = Path(argv[argv.index("-f") + 1])
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("PRIVATE KEY\n", encoding="utf-8")
    Path(str(path) + ".pub").write_text("ssh-ed25519 AAAA dev@workstation\n", encoding="utf-8")
