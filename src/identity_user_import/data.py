"""Input data related utils for managing users."""

import json
import typing
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

import pandera.polars as pla
import polars as pl
import structlog

from identity_user_import.accounts import ImportRecord

from .schemas import COLUMN_TYPES, UserImportSchema, parse_provider_data

logger = structlog.get_logger(__name__)

# csv column -> ImportRecord field
_RECORD_FIELDS = {
    "uid": "uid",
    "email": "email",
    "emailVerified": "email_verified",
    "displayName": "display_name",
    "phoneNumber": "phone_number",
    "photoUrl": "photo_url",
    "disabled": "disabled",
    "customClaims": "custom_claims",
    "passwordHash": "password_hash",
    "passwordSalt": "password_salt",
    "providerData": "provider_data",
}


class InputDataOptions(typing.Protocol):
    """Options used for reading input data."""

    data_location: Path | dict[str, Path]


class InputDataError(ValueError):
    """Raised when one or more input files can't be read or aren't valid."""

    def __init__(
        self,
        schema_errors: dict[str, pla.errors.SchemaErrors] | None,
        read_errors: dict[str, pl.exceptions.PolarsError] | None,
    ) -> None:
        """Initializes a new instance of InputDataError."""
        self.schema_errors = schema_errors or {}
        self.read_errors = read_errors or {}
        names = sorted({*self.schema_errors, *self.read_errors})
        super().__init__(f"Input data is not valid: {', '.join(names)}")


@dataclass(frozen=True)
class InputRecord:
    """A user to import and where it was read from."""

    location: str
    row: int
    record: ImportRecord


def _to_record(row: dict[str, typing.Any]) -> ImportRecord:
    fields = {_RECORD_FIELDS[k]: v for k, v in row.items() if v is not None}
    if "custom_claims" in fields:
        fields["custom_claims"] = json.loads(fields["custom_claims"])
    if "provider_data" in fields:
        fields["provider_data"] = parse_provider_data(fields["provider_data"])

    return ImportRecord(**fields)


class InputData:
    """The input data as dataframes."""

    def __init__(self, options: InputDataOptions) -> None:
        """Initializes a new instance of InputData."""
        self._options = options

    @property
    def _locations(self) -> dict[str, Path]:
        return (
            {"data": self._options.data_location}
            if isinstance(self._options.data_location, Path)
            else self._options.data_location
        )

    @staticmethod
    def _read(p: Path, *, ignore_errors: bool = False) -> pl.DataFrame:
        columns = pl.read_csv(p, comment_prefix="#", n_rows=0).columns
        return pl.read_csv(
            p,
            comment_prefix="#",
            ignore_errors=ignore_errors,
            schema_overrides={c: COLUMN_TYPES[c] for c in columns if c in COLUMN_TYPES},
        )

    def test(
        self,
    ) -> tuple[
        dict[str, pla.errors.SchemaErrors] | None,
        dict[str, pl.exceptions.PolarsError] | None,
    ]:
        """Test that the input data can be read and is valid."""
        schema_errors: dict[str, pla.errors.SchemaErrors] = {}
        read_errors: dict[str, pl.exceptions.PolarsError] = {}

        for n, p in self._locations.items():
            try:
                self._read(p)
            except pl.exceptions.PolarsError as e:
                read_errors[n] = e

            data: pl.DataFrame | None
            try:
                data = self._read(p, ignore_errors=True)
            except pl.exceptions.PolarsError as e:
                if n not in read_errors:
                    read_errors[n] = e
                continue

            try:
                UserImportSchema.validate(data, lazy=True)
            except pla.errors.SchemaError as se:
                schema_errors[n] = pla.errors.SchemaErrors(
                    UserImportSchema,
                    [se],
                    data,
                )
            except pla.errors.SchemaErrors as se:
                schema_errors[n] = se

        return (
            schema_errors if len(schema_errors) > 0 else None,
            read_errors if len(read_errors) > 0 else None,
        )

    def raise_for_errors(self) -> None:
        """Checks every input file before any of them is used.

        :raises InputDataError: when any file can't be read or isn't valid.
        """
        schema_errors, read_errors = self.test()
        if schema_errors is not None or read_errors is not None:
            raise InputDataError(schema_errors, read_errors)

    def records(self) -> Iterator[InputRecord]:
        """Reads, validates, and converts every row of the input data.

        Rows are numbered from 1, not counting the header or comments.

        :raises pl.exceptions.PolarsError: when a file can't be read.
        :raises pla.errors.SchemaErrors: when a file isn't valid.
        """
        for n, p in self._locations.items():
            data = UserImportSchema.validate(self._read(p), lazy=True)
            logger.info("read users", count=data.height, location=str(p))
            for i, row in enumerate(data.iter_rows(named=True)):
                yield InputRecord(n, i + 1, _to_record(row))

    def batch(self, size: int) -> Iterator[list[InputRecord]]:
        """Groups the records of all input files into batches of size."""
        if size < 1:
            err = "Batch size must be at least 1"
            raise ValueError(err)

        batch: list[InputRecord] = []
        for r in self.records():
            batch.append(r)
            if len(batch) == size:
                yield batch
                batch = []

        if len(batch) > 0:
            yield batch
