"""Models for check command."""

import typing
from dataclasses import dataclass
from pathlib import Path

import pandera.polars as pla
import polars as pl


@dataclass(frozen=True)
class CheckOptions:
    """Options used for checking an import's viability."""

    service_endpoint: str
    project_id: str
    token: str
    data_location: Path | dict[str, Path]
    timeout: float = 30.0


@dataclass
class CheckResults:
    """Results of checking an import's viablity."""

    @property
    def service_ok(self) -> bool:
        """Is the connection to the identity service ok?"""
        return self.service_error is None

    """The error (if there is one) connecting to the identity service."""
    service_error: str | None = None

    @property
    def schema_ok(self) -> bool:
        """Is the data valid?"""
        return self.schema_errors is None

    """The errors (if there are any) with the validity of the data."""
    schema_errors: dict[str, pla.errors.SchemaErrors] | None = None

    @property
    def read_ok(self) -> bool:
        """Can we read the data as a csv?"""
        return self.read_errors is None

    """The errors (if there are any) encountered reading the data."""
    read_errors: dict[str, pl.exceptions.PolarsError] | None = None

    def write_results(self, stream: typing.TextIO) -> None:
        """Writes a human readable report of the check to the stream."""
        if self.service_ok:
            stream.write("Identity service connection: OK\n")
        else:
            stream.write(f"Identity service connection: FAILED {self.service_error}\n")

        if self.read_ok and self.schema_ok:
            stream.write("Input data: OK\n")
            return

        for n, err in (self.read_errors or {}).items():
            stream.write(f"Input data {n}: FAILED to read {err}\n")
        for n, se in (self.schema_errors or {}).items():
            stream.write(f"Input data {n}: FAILED validation\n")
            for e in se.schema_errors:
                stream.write(f"    {e}\n")
