"""
Session admission for AVSS participants.

A Verifier checks an opaque credential before a caller is admitted to a
sharing session and returns the identifier the caller claims. It is
independent of the cryptography: the dealer only relies on it as a
precondition to dealing shares.

TokenVerifier is the simple verifier used in tests and local simulations. It
accepts a JSON object {"id_token": ..., "id": ...} whose token, after
trimming surrounding spaces, equals a configured value.
"""

from abc import ABC, abstractmethod
import json
from typing import Union
from .errors import AuthenticationError


class Verifier(ABC):
    """Interface for session admission verifiers."""

    @abstractmethod
    def get_identifier(self) -> str:
        """Return the name this verifier is registered under."""

    @abstractmethod
    def clean_token(self, token: str) -> str:
        """Normalize a token so equivalent encodings cannot be replayed."""

    @abstractmethod
    def verify_request_identity(self, json_token: Union[str, bytes]) -> str:
        """
        Verify a request credential.

        Returns:
        str: The identifier the caller claims.

        Raises:
        AuthenticationError: If the credential is malformed or rejected.
        """


class TokenVerifier(Verifier):
    """Verifier that accepts a single fixed token."""

    def __init__(self, correct_id: str):
        self.correct_id = correct_id

    def get_identifier(self) -> str:
        return "test"

    def clean_token(self, token: str) -> str:
        return token.strip(" ")

    def verify_request_identity(self, json_token: Union[str, bytes]) -> str:
        """
        Parse the credential and compare its token with the configured one.

        Parameters:
        json_token (Union[str, bytes]): JSON object with "id_token" and "id".

        Returns:
        str: The value of "id".

        Raises:
        AuthenticationError: If the JSON is invalid, a field is missing or not
        a string, or the token does not match.
        """
        try:
            params = json.loads(json_token)
        except ValueError as e:
            raise AuthenticationError("Credential is not valid JSON.") from e
        if not isinstance(params, dict):
            raise AuthenticationError("Credential must be a JSON object.")

        id_token = params.get("id_token", "")
        claimed_id = params.get("id", "")
        if not isinstance(id_token, str) or not isinstance(claimed_id, str):
            raise AuthenticationError("Credential fields must be strings.")

        if self.clean_token(id_token) != self.correct_id:
            raise AuthenticationError("Token does not match.")

        return claimed_id
