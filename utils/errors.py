"""
Service error taxonomy.

Every error maps to one HTTP status and one body style: JSON
``{"error": ...}`` for auth and credential failures, plain text for the
rest.  Store failures keep their cause chained for logging but only the
generic message reaches the client.
"""

from __future__ import annotations


class ServiceError(Exception):
    status_code: int = 500
    as_json: bool = False

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class AuthError(ServiceError):
    status_code = 403
    as_json = True


class CredentialsError(ServiceError):
    status_code = 400
    as_json = True


class NotFoundError(ServiceError):
    status_code = 404


class StoreError(ServiceError):
    status_code = 500
