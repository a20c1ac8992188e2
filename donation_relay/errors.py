"""Error types for donation ingestion and the shared store error parser."""

import json


class DonationError(Exception):
    """Base error; ``status_code`` is the HTTP status reported to the caller."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnknownPlatformError(DonationError):
    status_code = 400


class InvalidSignatureError(DonationError):
    status_code = 401


class InvalidDonationError(DonationError):
    status_code = 400


class StoreError(DonationError):
    """The backing store is unreachable or rejected a command."""

    status_code = 500


def parse_upstash_error(response_text: str) -> str:
    """Extract a readable message from an Upstash REST error response.

    Upstash replies with JSON like {"error": "ERR wrong number of arguments"}.
    Returns the error string when parseable, raw text otherwise.
    """
    try:
        body = json.loads(response_text)
        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
    except ValueError:
        pass
    return response_text
