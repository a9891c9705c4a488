# src/core/errors.py — v1
"""Error taxonomy shared by the matching core and its adapters.

Each error carries a ``status_code`` hint so the request-handling layer can
translate failures without inspecting messages.
"""

from __future__ import annotations


class DonorMatchError(Exception):
    """Base class for all donormatch errors."""

    status_code: int = 500


class InvalidRequestError(DonorMatchError):
    """Request is missing required input or violates a field constraint."""

    status_code = 400


class ProfileNotFoundError(DonorMatchError):
    """Referenced profile has no stored embedding."""

    status_code = 404

    def __init__(self, profile_id: str) -> None:
        self.profile_id = profile_id
        super().__init__(f"Profile {profile_id} not found in embeddings")


class ProviderFailureError(DonorMatchError):
    """Embedding or generation call failed (network, malformed or empty result)."""

    status_code = 502

    def __init__(self, provider: str, message: str) -> None:
        self.provider = provider
        super().__init__(f"[{provider}] {message}")


class DimensionMismatchError(DonorMatchError, ValueError):
    """Two vectors of different length were compared."""

    def __init__(self, len_a: int, len_b: int) -> None:
        self.len_a = len_a
        self.len_b = len_b
        super().__init__(f"Vector dimension mismatch: {len_a} vs {len_b}")


class InvalidInputError(DonorMatchError, ValueError):
    """A vector or stored record is null or contains undefined values."""
