"""Rendezvous model: the three FIFOs shared with the picker pane."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Rendezvous:
    """Paths of the named pipes inside one private temporary directory."""

    directory: Path
    input: Path
    output: Path
    status: Path

    @classmethod
    def in_directory(cls, directory: Path) -> "Rendezvous":
        return cls(
            directory=directory,
            input=directory / "in",
            output=directory / "out",
            status=directory / "ret",
        )

    def paths(self) -> tuple[Path, Path, Path]:
        return self.input, self.output, self.status
