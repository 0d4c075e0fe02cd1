# errors.py
from typing import Optional

DOCUMENT_HEADER = "document header"


class PairingError(Exception):
    """A field that could not be read or does not have its expected shape."""

    stage = "parse"
    event = "pairing_parse_failed"

    def __init__(
        self,
        pairing_id: str,
        field: str,
        expected: str,
        found: Optional[str] = None,
    ) -> None:
        self.pairing_id = pairing_id
        self.field = field
        self.expected = expected
        self.found = found
        super().__init__(self.describe())

    def describe(self) -> str:
        found = "nothing" if self.found is None else repr(self.found)
        return f"Pairing {self.pairing_id}: {self.field} expected {self.expected}, found {found}"


class PairingParseError(PairingError):
    """Recovery rules exhausted while tokenizing a block (or the title line was rejected)."""


class PairingValidationError(PairingError):
    """An assembled record violates its canonical format."""

    stage = "validate"
    event = "pairing_validation_failed"
