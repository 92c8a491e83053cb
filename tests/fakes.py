"""Test double for tickle.core.runner.run."""

import subprocess

from tickle.core.errors import ControlPlaneUnavailable


class FakeRunner:
    """Records every command and answers from a table of canned results.

    ``responses`` maps an argv tuple to ``(returncode, stdout, stderr)``;
    unlisted commands succeed with empty output. Entries in ``missing``
    fail to launch: a program name fails every call to it, an argv tuple
    fails only that exact command.
    """

    def __init__(self, responses=None, missing=()):
        self.responses = dict(responses or {})
        self.missing = set(missing)
        self.calls: list[tuple[str, ...]] = []

    def __call__(self, program: str, *args: str) -> subprocess.CompletedProcess:
        argv = (program, *args)
        self.calls.append(argv)
        if program in self.missing or argv in self.missing:
            raise ControlPlaneUnavailable(f"Failed to run {program}: not found")
        returncode, stdout, stderr = self.responses.get(argv, (0, "", ""))
        return subprocess.CompletedProcess(list(argv), returncode, stdout, stderr)

    def actions(self, program: str = "systemctl") -> list[str]:
        """The first argument of every call made to ``program``."""
        return [call[1] for call in self.calls if call[0] == program]
