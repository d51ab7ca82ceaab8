"""Models for import command."""

import typing
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class ImportOptions:
    """Options used for importing users into the identity service."""

    service_endpoint: str
    project_id: str
    token: str
    data_location: Path | dict[str, Path]

    batch_size: int = 1000
    timeout: float = 30.0

    hash_algorithm: str | None = None
    hash_parameters: dict[str, typing.Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ImportFailure:
    """A user the identity service failed to import."""

    message: str

    """Where the user was read from, None if the service sent a bad index."""
    location: str | None = None
    row: int | None = None
    uid: str | None = None


@dataclass
class ImportResults:
    """Results of importing users into the identity service."""

    batches: int = 0
    success_count: int = 0
    failure_count: int = 0
    failures: list[ImportFailure] = field(default_factory=list)

    def write_results(self, stream: typing.TextIO) -> None:
        """Writes a human readable report of the import to the stream."""
        stream.write(
            f"Imported {self.success_count} users in {self.batches} batches, "
            f"{self.failure_count} failed\n",
        )
        for f in self.failures:
            where = "unknown row" if f.location is None else f"{f.location} row {f.row}"
            stream.write(f"    {where} ({f.uid}): {f.message}\n")
