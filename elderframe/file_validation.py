"""File checks by named rules, and SHA-256 checksums for integrity."""

from __future__ import annotations

import hashlib
import os
from collections.abc import Callable
from dataclasses import dataclass, field

DEFAULT_MAX_FILE_SIZE = 100 * 1024 * 1024
ALLOWED_EXTENSIONS = (".go", ".json", ".txt", ".md", ".yaml", ".yml")

PathLike = str | os.PathLike


@dataclass
class ValidationRule:
    """A named check that raises on failure; required rules make a file invalid."""

    name: str
    validator: Callable[[PathLike], None]
    required: bool


@dataclass
class ValidationResult:
    """The outcome of validating one file."""

    valid: bool = True
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    checksum: str = ""


def _extension(path: PathLike) -> str:
    """The suffix from the last dot of the final path element, or ""."""
    name = os.path.basename(os.fspath(path))
    dot = name.rfind(".")
    return name[dot:] if dot >= 0 else ""


def _sha256(path: PathLike) -> str:
    digest = hashlib.sha256()
    with open(path, "rb") as stream:
        for chunk in iter(lambda: stream.read(65536), b""):
            digest.update(chunk)
    return digest.hexdigest()


class FileValidator:
    """Validates files against a list of rules and keeps known checksums."""

    def __init__(self, max_file_size: int = DEFAULT_MAX_FILE_SIZE) -> None:
        self.max_file_size = max_file_size
        self.checksums: dict[str, str] = {}
        self.rules: list[ValidationRule] = [
            ValidationRule("file_exists", self._check_exists, True),
            ValidationRule("file_size", self._check_size, True),
            ValidationRule("file_extension", self._check_extension, False),
        ]

    def _check_exists(self, path: PathLike) -> None:
        try:
            os.stat(path)
        except FileNotFoundError:
            raise FileNotFoundError("file does not exist") from None

    def _check_size(self, path: PathLike) -> None:
        size = os.stat(path).st_size
        if size > self.max_file_size:
            raise ValueError(f"file size {size} exceeds maximum {self.max_file_size}")

    def _check_extension(self, path: PathLike) -> None:
        ext = _extension(path)
        if ext not in ALLOWED_EXTENSIONS:
            raise ValueError(f"file extension {ext} not in allowed list")

    def validate(self, path: PathLike) -> ValidationResult:
        """Compute the file's checksum and run every rule against it."""
        result = ValidationResult()
        try:
            result.checksum = _sha256(path)
        except OSError as err:
            result.errors.append(f"Failed to compute checksum: {err}")
            result.valid = False

        for rule in self.rules:
            try:
                rule.validator(path)
            except Exception as err:  # a rule reports failure by raising anything
                message = f"{rule.name}: {err}"
                if rule.required:
                    result.errors.append(message)
                    result.valid = False
                else:
                    result.warnings.append(message)
        return result

    def add_rule(
        self, name: str, validator: Callable[[PathLike], None], required: bool
    ) -> None:
        """Append a rule that runs after the existing ones."""
        self.rules.append(ValidationRule(name, validator, required))

    def validate_checksum(self, path: PathLike, expected: str) -> bool:
        """Whether the file's SHA-256 equals *expected*; False if it cannot be read."""
        try:
            return _sha256(path) == expected
        except OSError:
            return False

    def store_checksum(self, path: PathLike) -> None:
        """Record the file's current checksum; raises OSError if it cannot be read."""
        self.checksums[os.fspath(path)] = _sha256(path)

    def verify_integrity(self, path: PathLike) -> bool:
        """Whether the file still matches its stored checksum; False if none is stored."""
        expected = self.checksums.get(os.fspath(path))
        if expected is None:
            return False
        return self.validate_checksum(path, expected)