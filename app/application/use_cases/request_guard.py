from __future__ import annotations

import logging
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from app.application.exceptions import RateLimited, SpamDetected, ValidationFailed
from app.application.ports.rate_limit_store import RateLimitStorePort


ModelT = TypeVar("ModelT", bound=BaseModel)

HONEYPOT_FIELD = "website"


def flatten_validation_errors(error: PydanticValidationError) -> dict[str, list[str]]:
    """Collapse pydantic errors into {field: [messages]}, keyed by the top-level request field."""
    details: dict[str, list[str]] = {}
    for item in error.errors():
        loc = item.get("loc") or ()
        field = str(loc[0]) if loc else "body"
        message = str(item.get("msg", "Invalid value"))
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        if len(loc) > 1:
            nested = ".".join(str(part) for part in loc[1:])
            message = f"{nested}: {message}"
        details.setdefault(field, []).append(message)
    return details


class RequestGuard:
    """
    Admission control for public form endpoints: rate limit, honeypot, then schema.

    The rate-limit store is the only shared state and is injected so tests
    and deployments control its lifetime.
    """

    def __init__(
        self,
        store: RateLimitStorePort,
        max_requests: int = 3,
        window_seconds: float = 60.0,
    ) -> None:
        self._store = store
        self._max_requests = max_requests
        self._window_seconds = window_seconds
        self._logger = logging.getLogger(__name__)

    def admit(self, raw_body: Any, source_ip: str, schema: type[ModelT], scope: str) -> ModelT:
        self.check_rate_limit(source_ip, scope)

        if isinstance(raw_body, dict) and self.is_spam(raw_body):
            self._logger.info("Honeypot triggered", extra={"ip": source_ip, "scope": scope})
            raise SpamDetected("Honeypot field populated")

        if not isinstance(raw_body, dict):
            raise ValidationFailed({"body": ["Request body must be a JSON object"]})

        try:
            return schema.model_validate(raw_body)
        except PydanticValidationError as e:
            details = flatten_validation_errors(e)
            self._logger.info(
                "Request failed validation",
                extra={"ip": source_ip, "scope": scope, "reason": ",".join(sorted(details))},
            )
            raise ValidationFailed(details) from e

    def check_rate_limit(self, source_ip: str, scope: str) -> None:
        key = f"{scope}:{source_ip}"
        if not self._store.hit(key, self._max_requests, self._window_seconds):
            self._logger.warning("Rate limit exceeded", extra={"ip": source_ip, "scope": scope})
            raise RateLimited("Too many requests")

    @staticmethod
    def is_spam(raw_body: dict[str, Any]) -> bool:
        value = raw_body.get(HONEYPOT_FIELD)
        if value is None or value is False:
            return False
        return str(value).strip() != ""
