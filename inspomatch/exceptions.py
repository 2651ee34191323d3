# Path: inspomatch/exceptions.py
# Purpose: Define the exception hierarchy raised outside the pure scoring core.
# Layer: root.
# Details: Argument and dimension problems keep using ValueError; these cover boundary parsing and decoding.


class InspoMatchError(Exception):
    """Base class for inspomatch errors."""


class CandidateParseError(InspoMatchError):
    """A datastore row could not be turned into a Candidate."""

    def __init__(self, media_id: object, reason: str) -> None:
        self.media_id = media_id
        self.reason = reason
        super().__init__(f"Invalid candidate row {media_id!r}: {reason}")


class ImageDecodeError(InspoMatchError):
    """Uploaded image bytes could not be decoded."""
