"""Password hash algorithm configurations for imported users."""

import typing
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from ._errors import HashConfigValidationError


class HashAlgorithm(str, Enum):
    """Algorithms the identity service can verify imported passwords with."""

    BCRYPT = "BCRYPT"
    MD5 = "MD5"
    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"
    HMAC_MD5 = "HMAC_MD5"
    HMAC_SHA1 = "HMAC_SHA1"
    HMAC_SHA256 = "HMAC_SHA256"
    HMAC_SHA512 = "HMAC_SHA512"
    PBKDF2_SHA1 = "PBKDF2_SHA1"
    PBKDF2_SHA256 = "PBKDF2_SHA256"
    SCRYPT = "SCRYPT"
    STANDARD_SCRYPT = "STANDARD_SCRYPT"


def _key(value: typing.Any, name: str) -> str:
    if not isinstance(value, str) or len(value) == 0:
        err = f"{name} must be a non-empty string"
        raise HashConfigValidationError(err)
    return value


def _count(value: typing.Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        err = f"{name} must be a non-negative integer"
        raise HashConfigValidationError(err)
    return value


@dataclass(frozen=True)
class HashAlgorithmConfig:
    """How the password hashes of a batch of imported users were produced.

    Prefer the factory named after the algorithm. The constructor takes
    parameters by their request field names and requires exactly the ones
    the algorithm is configured with.

    One configuration applies to every record of a batch.
    """

    algorithm: HashAlgorithm
    parameters: Mapping[str, str | int] = field(
        default_factory=lambda: MappingProxyType({}),
    )

    def __post_init__(self) -> None:
        """Checks the algorithm's parameters and freezes them.

        :raises HashConfigValidationError: when the algorithm is unknown or
            the parameters aren't exactly the ones it is configured with.
        """
        try:
            alg = HashAlgorithm(self.algorithm)
        except (TypeError, ValueError) as e:
            err = f"Unknown hash algorithm {self.algorithm}"
            raise HashConfigValidationError(err) from e

        if not isinstance(self.parameters, Mapping):
            err = "parameters must be a mapping"
            raise HashConfigValidationError(err)

        expected = _WIRE_PARAMETERS[alg]
        if set(self.parameters.keys()) != set(expected):
            err = f"{alg.value} takes exactly the parameters {list(expected)}"
            raise HashConfigValidationError(err)
        for name, value in self.parameters.items():
            if name in _KEY_PARAMETERS:
                _key(value, name)
            else:
                _count(value, name)

        object.__setattr__(self, "algorithm", alg)
        object.__setattr__(self, "parameters", MappingProxyType(dict(self.parameters)))

    def serialize(self) -> dict[str, typing.Any]:
        """The configuration as the hashConfig of a batchCreate request."""
        return {"hashAlgorithm": self.algorithm.value, **self.parameters}

    @classmethod
    def bcrypt(cls) -> "HashAlgorithmConfig":
        """Configuration for bcrypt hashes, the salt is part of the hash."""
        return cls(HashAlgorithm.BCRYPT)

    @classmethod
    def md5(cls) -> "HashAlgorithmConfig":
        """Configuration for plain MD5 hashes."""
        return cls(HashAlgorithm.MD5)

    @classmethod
    def sha1(cls) -> "HashAlgorithmConfig":
        """Configuration for plain SHA1 hashes."""
        return cls(HashAlgorithm.SHA1)

    @classmethod
    def sha256(cls) -> "HashAlgorithmConfig":
        """Configuration for plain SHA256 hashes."""
        return cls(HashAlgorithm.SHA256)

    @classmethod
    def sha512(cls) -> "HashAlgorithmConfig":
        """Configuration for plain SHA512 hashes."""
        return cls(HashAlgorithm.SHA512)

    @classmethod
    def hmac_md5(cls, key: str) -> "HashAlgorithmConfig":
        """Configuration for HMAC hashes signed with the base64 encoded key."""
        return cls(HashAlgorithm.HMAC_MD5, {"signerKey": _key(key, "key")})

    @classmethod
    def hmac_sha1(cls, key: str) -> "HashAlgorithmConfig":
        """Configuration for HMAC hashes signed with the base64 encoded key."""
        return cls(HashAlgorithm.HMAC_SHA1, {"signerKey": _key(key, "key")})

    @classmethod
    def hmac_sha256(cls, key: str) -> "HashAlgorithmConfig":
        """Configuration for HMAC hashes signed with the base64 encoded key."""
        return cls(HashAlgorithm.HMAC_SHA256, {"signerKey": _key(key, "key")})

    @classmethod
    def hmac_sha512(cls, key: str) -> "HashAlgorithmConfig":
        """Configuration for HMAC hashes signed with the base64 encoded key."""
        return cls(HashAlgorithm.HMAC_SHA512, {"signerKey": _key(key, "key")})

    @classmethod
    def pbkdf2_sha1(cls, rounds: int) -> "HashAlgorithmConfig":
        """Configuration for PBKDF2 hashes derived over rounds iterations."""
        return cls(HashAlgorithm.PBKDF2_SHA1, {"rounds": _count(rounds, "rounds")})

    @classmethod
    def pbkdf2_sha256(cls, rounds: int) -> "HashAlgorithmConfig":
        """Configuration for PBKDF2 hashes derived over rounds iterations."""
        return cls(HashAlgorithm.PBKDF2_SHA256, {"rounds": _count(rounds, "rounds")})

    @classmethod
    def scrypt(
        cls,
        key: str,
        salt_separator: str,
        rounds: int,
        memory_cost: int,
    ) -> "HashAlgorithmConfig":
        """Firebase's modified scrypt.

        :param key: The base64 encoded signer key.
        :param salt_separator: The base64 encoded salt separator.
        """
        return cls(
            HashAlgorithm.SCRYPT,
            {
                "signerKey": _key(key, "key"),
                "saltSeparator": _key(salt_separator, "salt_separator"),
                "rounds": _count(rounds, "rounds"),
                "memoryCost": _count(memory_cost, "memory_cost"),
            },
        )

    @classmethod
    def standard_scrypt(
        cls,
        memory_cost: int,
        rounds: int,
        parallelization: int,
        block_size: int,
        dk_len: int,
    ) -> "HashAlgorithmConfig":
        """Standard scrypt.

        :param dk_len: The derived key length.
        """
        return cls(
            HashAlgorithm.STANDARD_SCRYPT,
            {
                "memoryCost": _count(memory_cost, "memory_cost"),
                "rounds": _count(rounds, "rounds"),
                "parallelization": _count(parallelization, "parallelization"),
                "blockSize": _count(block_size, "block_size"),
                "dkLen": _count(dk_len, "dk_len"),
            },
        )

    @classmethod
    def from_options(
        cls,
        algorithm: str | HashAlgorithm,
        **parameters: typing.Any,
    ) -> "HashAlgorithmConfig":
        """Builds a configuration from an algorithm name and its parameters.

        Parameters are named like the factory arguments, parameters the
        algorithm does not use are ignored.

        :raises HashConfigValidationError: when the algorithm is unknown or a
            parameter it requires is missing or invalid.
        """
        try:
            alg = (
                algorithm
                if isinstance(algorithm, HashAlgorithm)
                else HashAlgorithm(algorithm.upper())
            )
        except (AttributeError, ValueError) as e:
            err = f"Unknown hash algorithm {algorithm}"
            raise HashConfigValidationError(err) from e

        factory = getattr(cls, alg.value.lower())
        required = _FACTORY_PARAMETERS[alg]
        missing = [p for p in required if parameters.get(p) is None]
        if len(missing) > 0:
            err = f"{alg.value} requires {', '.join(missing)}"
            raise HashConfigValidationError(err)

        return typing.cast(
            HashAlgorithmConfig,
            factory(**{p: parameters[p] for p in required}),
        )


_KEYED = ("key",)
_ROUNDS = ("rounds",)
_FACTORY_PARAMETERS: dict[HashAlgorithm, tuple[str, ...]] = {
    HashAlgorithm.BCRYPT: (),
    HashAlgorithm.MD5: (),
    HashAlgorithm.SHA1: (),
    HashAlgorithm.SHA256: (),
    HashAlgorithm.SHA512: (),
    HashAlgorithm.HMAC_MD5: _KEYED,
    HashAlgorithm.HMAC_SHA1: _KEYED,
    HashAlgorithm.HMAC_SHA256: _KEYED,
    HashAlgorithm.HMAC_SHA512: _KEYED,
    HashAlgorithm.PBKDF2_SHA1: _ROUNDS,
    HashAlgorithm.PBKDF2_SHA256: _ROUNDS,
    HashAlgorithm.SCRYPT: ("key", "salt_separator", "rounds", "memory_cost"),
    HashAlgorithm.STANDARD_SCRYPT: (
        "memory_cost",
        "rounds",
        "parallelization",
        "block_size",
        "dk_len",
    ),
}

_KEY_PARAMETERS = frozenset({"signerKey", "saltSeparator"})

# request field names of each algorithm's parameters
_WIRE_PARAMETERS: dict[HashAlgorithm, tuple[str, ...]] = {
    HashAlgorithm.BCRYPT: (),
    HashAlgorithm.MD5: (),
    HashAlgorithm.SHA1: (),
    HashAlgorithm.SHA256: (),
    HashAlgorithm.SHA512: (),
    HashAlgorithm.HMAC_MD5: ("signerKey",),
    HashAlgorithm.HMAC_SHA1: ("signerKey",),
    HashAlgorithm.HMAC_SHA256: ("signerKey",),
    HashAlgorithm.HMAC_SHA512: ("signerKey",),
    HashAlgorithm.PBKDF2_SHA1: ("rounds",),
    HashAlgorithm.PBKDF2_SHA256: ("rounds",),
    HashAlgorithm.SCRYPT: ("signerKey", "saltSeparator", "rounds", "memoryCost"),
    HashAlgorithm.STANDARD_SCRYPT: (
        "memoryCost",
        "rounds",
        "parallelization",
        "blockSize",
        "dkLen",
    ),
}
