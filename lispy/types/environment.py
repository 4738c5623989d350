"""Runtime environment for Lispy.

An Environment is one frame of bindings from symbol names to values plus an
optional `parent` link. Frames are chained child -> root; lookup takes the
first match, so inner frames shadow outer ones.

A child never owns its parent. Values cross the frame boundary only as copies:
`get` hands out a copy and `put` stores one, so nothing outside the frame can
alias a stored binding.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional

from lispy.types.value import Error, ErrorKind, Value, copy, destroy


class Environment:
    """Hierarchical mapping from names to Lispy values."""

    __slots__ = ("vars", "parent")

    def __init__(self, parent: Optional[Environment] = None):
        # Insertion-ordered; names are unique within one frame
        self.vars: dict[str, Value] = {}
        self.parent: Environment | None = parent

    def root(self) -> Environment:
        env = self
        while env.parent is not None:
            env = env.parent
        return env

    def find(self, name: str) -> Optional[Environment]:
        """Find the nearest environment in the chain that binds `name`."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.vars:
                return env
            env = env.parent
        return None

    def get(self, name: str) -> Value:
        """Return a copy of the value bound to `name`, searching root-ward.

        An unbound name yields an UNBOUND_SYMBOL Error value.
        """
        env = self.find(name)
        if env is None:
            return Error(f"Unbound Symbol '{name}'", ErrorKind.UNBOUND_SYMBOL)
        return copy(env.vars[name])

    def put(self, name: str, value: Value) -> None:
        """Bind a copy of `value` to `name` in this exact frame."""
        stored = copy(value)
        old = self.vars.get(name)
        if old is not None:
            destroy(old)
        self.vars[name] = stored

    def define(self, name: str, value: Value) -> None:
        """Bind `name` in the root frame, whatever the current depth."""
        self.root().put(name, value)

    def update(self, mapping: dict[str, Value]) -> None:
        """Bulk-put a mapping of name -> value in the current frame."""
        for k, v in mapping.items():
            self.put(k, v)

    def copy(self) -> Environment:
        """Duplicate this frame's bindings. The parent is shared, not copied."""
        env = Environment(self.parent)
        for k, v in self.vars.items():
            env.vars[k] = copy(v)
        return env

    def clear(self) -> None:
        """Release every binding of this frame."""
        for v in self.vars.values():
            destroy(v)
        self.vars.clear()

    def names(self) -> list[str]:
        return list(self.vars)

    def __contains__(self, name: str) -> bool:
        return self.find(name) is not None

    def __len__(self) -> int:
        return len(self.vars)

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v!r}" for k, v in self.vars.items()))
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.parent is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Detailed chain representation for debugging purposes."""
        chain = []
        env: Optional[Environment] = self
        while env is not None:
            with StringIO() as frame:
                env._write_vars(frame)
                chain.append(frame.getvalue())
            env = env.parent
        return f"<Environment chain: {' -> '.join(chain)}>"


def create_environment() -> Environment:
    """Create a fresh root environment with no bindings."""
    return Environment()
