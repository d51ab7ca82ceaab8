"""The Command Line Interface for iduser."""

import argparse
import getpass
import os
import sys
import typing
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from identity_user_import import _cli_log
from identity_user_import.accounts import HashAlgorithm
from identity_user_import.commands import check, user_import
from identity_user_import.identity import DEFAULT_ENDPOINT, DEFAULT_TIMEOUT

_SERVICE__ENDPOINT = "IDUSER__SERVICE__ENDPOINT"
_SERVICE__PROJECT = "IDUSER__SERVICE__PROJECT"
_SERVICE__TOKEN = "IDUSER__SERVICE__TOKEN"  # noqa:S105
_SERVICE__TIMEOUT = "IDUSER__SERVICE__TIMEOUT"

_BATCH__BATCHSIZE = "IDUSER__BATCHSETTINGS__BATCHSIZE"

_HASH__ALGORITHM = "IDUSER__HASH__ALGORITHM"
_HASH__SIGNERKEY = "IDUSER__HASH__SIGNERKEY"
_HASH__SALTSEPARATOR = "IDUSER__HASH__SALTSEPARATOR"
_HASH__ROUNDS = "IDUSER__HASH__ROUNDS"
_HASH__MEMORYCOST = "IDUSER__HASH__MEMORYCOST"
_HASH__PARALLELIZATION = "IDUSER__HASH__PARALLELIZATION"
_HASH__BLOCKSIZE = "IDUSER__HASH__BLOCKSIZE"
_HASH__DKLEN = "IDUSER__HASH__DKLEN"


def _env_int(name: str) -> int | None:
    return int(os.environ[name]) if name in os.environ else None


@dataclass
class _ParsedArgs:
    # These have internal defaults, env vars, and cli flags
    service_endpoint: str
    timeout: float
    batch_size: int

    # These have env vars and cli flags
    project_id: str | None = None
    token: str | None = None
    ask_token: bool = False

    hash_algorithm: str | None = None
    hash_signer_key: str | None = None
    hash_salt_separator: str | None = None
    hash_rounds: int | None = None
    hash_memory_cost: int | None = None
    hash_parallelization: int | None = None
    hash_block_size: int | None = None
    hash_dk_len: int | None = None

    # the subparser
    command: str | None = None

    # see note below on nargs + subparsers
    additional_data: list[Path] | None = None
    data: Path | None = None

    # these have just defaults and cli flags
    verbose: int = 0
    log_directory: Path = Path("./logs")

    @property
    def data_location(self) -> Path | dict[str, Path] | None:
        if self.data is None:
            return None

        all_data = [self.data]
        if self.additional_data is not None:
            all_data = all_data + self.additional_data

        locations: dict[str, Path] = {}
        for p in all_data:
            if p.is_file():
                locations[p.stem] = p
                continue

            if not p.is_file() and not p.is_dir():
                file = f"{p.resolve().absolute()} does not exist or isn't readable"
                raise ValueError(file)

            locations = locations | {sp.stem: sp for sp in p.glob("**/*.csv")}

        return locations if len(locations) > 0 else None

    @property
    def hash_parameters(self) -> dict[str, typing.Any]:
        params = {
            "key": self.hash_signer_key,
            "salt_separator": self.hash_salt_separator,
            "rounds": self.hash_rounds,
            "memory_cost": self.hash_memory_cost,
            "parallelization": self.hash_parallelization,
            "block_size": self.hash_block_size,
            "dk_len": self.hash_dk_len,
        }
        return {k: v for k, v in params.items() if v is not None}

    def as_check_options(self) -> check.CheckOptions:
        if self.project_id is None or self.token is None or self.data_location is None:
            none = "One or more required options is missing"
            raise ValueError(none)

        return check.CheckOptions(
            self.service_endpoint,
            self.project_id,
            self.token,
            self.data_location,
            self.timeout,
        )

    def as_import_options(self) -> user_import.ImportOptions:
        if self.project_id is None or self.token is None or self.data_location is None:
            none = "One or more required options is missing"
            raise ValueError(none)

        return user_import.ImportOptions(
            self.service_endpoint,
            self.project_id,
            self.token,
            self.data_location,
            self.batch_size,
            self.timeout,
            self.hash_algorithm,
            self.hash_parameters,
        )

    @staticmethod
    @lru_cache
    def parser() -> argparse.ArgumentParser:
        desc = "Validates and bulk imports user accounts into an identity service"
        parser = argparse.ArgumentParser(prog="iduser", description=desc)

        parser.add_argument("--version", action="version", version="%(prog)s 0.1.0")
        parser.add_argument("-v", "--verbose", action="count")
        parser.add_argument("--log-directory", type=Path)

        service_parser = parser.add_argument_group("Identity Service Settings")
        service_parser.add_argument(
            "-e",
            "--service-endpoint",
            help="Base url of the identity service REST api. "
            f"Can also be specified as {_SERVICE__ENDPOINT} environment variable.",
            type=str,
        )
        service_parser.add_argument(
            "-P",
            "--project-id",
            help="Project to import users into. "
            f"Can also be specified as {_SERVICE__PROJECT} environment variable.",
            type=str,
        )
        service_parser.add_argument(
            "-t",
            "--ask-token",
            action="store_true",
            help="Whether to ask for the OAuth2 access token. "
            f"Can also be specified as {_SERVICE__TOKEN} environment variable.",
        )
        service_parser.add_argument(
            "--timeout",
            help="Seconds to wait for the identity service to respond. "
            f"Can also be specified as {_SERVICE__TIMEOUT} environment variable.",
            type=float,
        )

        batch_parser = parser.add_argument_group("Batch Settings")
        batch_parser.add_argument(
            "--batch-size",
            help="Maximum number of users to send at a time, at most 1000. "
            f"Can also be specified as {_BATCH__BATCHSIZE} environment variable.",
            type=int,
        )

        hash_parser = parser.add_argument_group("Password Hash Settings")
        hash_parser.add_argument(
            "--hash-algorithm",
            help="Algorithm that produced the passwordHash column. "
            f"Can also be specified as {_HASH__ALGORITHM} environment variable.",
            choices=[a.value for a in HashAlgorithm],
            type=str.upper,
        )
        for flag, env, kind, desc in [
            ("--hash-signer-key", _HASH__SIGNERKEY, str, "Base64 signer key"),
            ("--hash-salt-separator", _HASH__SALTSEPARATOR, str, "Salt separator"),
            ("--hash-rounds", _HASH__ROUNDS, int, "Rounds"),
            ("--hash-memory-cost", _HASH__MEMORYCOST, int, "Memory cost"),
            ("--hash-parallelization", _HASH__PARALLELIZATION, int, "Parallelization"),
            ("--hash-block-size", _HASH__BLOCKSIZE, int, "Block size"),
            ("--hash-dk-len", _HASH__DKLEN, int, "Derived key length"),
        ]:
            hash_parser.add_argument(
                flag,
                help=f"{desc} used by the hash algorithm. "
                f"Can also be specified as {env} environment variable.",
                type=kind,
            )

        data_desc = "One or more .csvs or directories with .csvs to operate on."

        def data(p: argparse.ArgumentParser) -> None:
            p.add_argument(
                "additional_data",
                action="extend",
                nargs="*",
                metavar="data",
                type=Path,
                help=data_desc,
            )

        commands = parser.add_subparsers(dest="command", metavar="command")
        check_desc = "Quickly checks input files and the service connection for validity."
        check_parser = commands.add_parser(
            "check",
            help=check_desc,
            description=check_desc,
        )

        import_desc = "Imports input files in batches and reports on failed users."
        import_parser = commands.add_parser(
            "import",
            help=import_desc,
            description=import_desc,
        )

        # https://stackoverflow.com/a/74492728
        # subparsers interact poorly with nargs
        # we have a somewhat dummy path arg here to display properly in help
        data(check_parser)
        data(import_parser)
        parser.add_argument(
            "data",
            type=Path,
            help=data_desc,
        )

        return parser


def main(args: list[str] | None = None) -> None:
    """Marshalls inputs and executes commands for iduser."""
    parsed_args = _ParsedArgs(
        service_endpoint=os.environ.get(_SERVICE__ENDPOINT, DEFAULT_ENDPOINT),
        timeout=float(os.environ.get(_SERVICE__TIMEOUT, str(DEFAULT_TIMEOUT))),
        batch_size=int(os.environ.get(_BATCH__BATCHSIZE, "1000")),
        project_id=os.environ.get(_SERVICE__PROJECT),
        token=os.environ.get(_SERVICE__TOKEN),
        hash_algorithm=os.environ.get(_HASH__ALGORITHM),
        hash_signer_key=os.environ.get(_HASH__SIGNERKEY),
        hash_salt_separator=os.environ.get(_HASH__SALTSEPARATOR),
        hash_rounds=_env_int(_HASH__ROUNDS),
        hash_memory_cost=_env_int(_HASH__MEMORYCOST),
        hash_parallelization=_env_int(_HASH__PARALLELIZATION),
        hash_block_size=_env_int(_HASH__BLOCKSIZE),
        hash_dk_len=_env_int(_HASH__DKLEN),
    )
    parser = _ParsedArgs.parser()
    parsed_args = parser.parse_args(args, namespace=parsed_args)
    _cli_log.initialize(
        parsed_args.log_directory,
        30 - (parsed_args.verbose * 10),
        20 - (min(1, parsed_args.verbose) * 10),
    )

    if parsed_args.ask_token:
        parsed_args.token = getpass.getpass("Access Token:")
        if len(parsed_args.token) == 0:
            empty = "Access Token is required"
            parser.print_usage()
            raise ValueError(empty)

    if parsed_args.command == "check":
        try:
            c_opts = parsed_args.as_check_options()
        except ValueError:
            parser.print_usage()
            raise
        check.run(c_opts).write_results(sys.stdout)
    elif parsed_args.command == "import":
        try:
            i_opts = parsed_args.as_import_options()
        except ValueError:
            parser.print_usage()
            raise
        user_import.run(i_opts).write_results(sys.stdout)


if __name__ == "__main__":
    main()
