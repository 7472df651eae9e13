# shaderpass/errors.py
from __future__ import annotations


class ShaderPassError(RuntimeError):
    """Base class for errors raised by shaderpass."""


class ShaderCompileError(ShaderPassError):
    """A shader stage failed to compile. `log` holds the compiler output."""

    def __init__(self, stage: str, log: str) -> None:
        self.stage = stage
        self.log = log
        super().__init__(f"Error compiling {stage}: {log}")


class ProgramLinkError(ShaderPassError):
    """The compiled stages failed to link. `log` holds the linker output."""

    def __init__(self, log: str) -> None:
        self.log = log
        super().__init__(f"Error linking program: {log}")


class IncompleteTargetError(ShaderPassError):
    """An off-screen target is not complete and cannot be read or drawn to."""
