"""Security checks applied to every visit before any state changes.

Checks run in a fixed order and the first failure wins:

1. Origin header present                      -> 400 missing_origin
2. Origin on the allow-list (exact match)     -> 403 origin_not_allowed
3. User agent present and long enough         -> 403 invalid_user_agent
4. User agent not matching a bot pattern      -> 403 automated_request
5. Referer starting with the origin           -> warning log only

Referer is never enforced: browsers frequently omit it or trim it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Mapping

from app.core.bot_patterns import BotPatternMatcher
from app.core.errors import RequestRejectedError

logger = logging.getLogger(__name__)

UNKNOWN_SOURCE_IP = "unknown"


@dataclass(frozen=True)
class AcceptedRequest:
    """A visit that passed validation."""

    origin: str
    source_ip: str
    user_agent: str


def get_header(headers: Mapping[str, str] | None, name: str) -> str | None:
    """Case-insensitive header lookup.

    Gateways forward headers with inconsistent casing (``origin`` vs
    ``Origin``), so the exact name is tried first, then a folded match.
    """
    if not headers:
        return None
    if name in headers:
        return headers[name]
    lowered = name.lower()
    for key, value in headers.items():
        if key.lower() == lowered:
            return value
    return None


class RequestValidator:
    """Applies the allow-list and user-agent rules to incoming visits.

    Attributes:
        allowed_origins: Exact-match origins permitted to record visits.
        bot_matcher: Compiled automated-client patterns.
        min_user_agent_length: Shorter user agents are rejected.
    """

    def __init__(
        self,
        *,
        allowed_origins: Iterable[str],
        bot_matcher: BotPatternMatcher,
        min_user_agent_length: int = 10,
    ) -> None:
        self.allowed_origins: tuple[str, ...] = tuple(allowed_origins)
        self._allowed_set = frozenset(self.allowed_origins)
        self.bot_matcher = bot_matcher
        self.min_user_agent_length = min_user_agent_length

    def is_origin_allowed(self, origin: str | None) -> bool:
        return origin is not None and origin in self._allowed_set

    def _reject(
        self,
        *,
        code: str,
        message: str,
        http_status: int,
        origin: str | None,
        user_agent: str,
        source_ip: str,
        matched_pattern: str | None = None,
    ) -> RequestRejectedError:
        extra = {
            "reason": code,
            "origin": origin,
            "user_agent": user_agent,
            "source_ip": source_ip,
            "status_code": http_status,
        }
        if matched_pattern is not None:
            extra["matched_pattern"] = matched_pattern
        logger.warning("visit.rejected", extra=extra)
        return RequestRejectedError(
            code=code,
            message=message,
            http_status=http_status,
            details={"source_ip": source_ip},
        )

    def validate(
        self,
        headers: Mapping[str, str] | None,
        source_ip: str | None = None,
    ) -> AcceptedRequest:
        """Run every check against the request headers.

        Args:
            headers: Request headers (any casing).
            source_ip: Caller address; ``"unknown"`` when not provided.

        Returns:
            AcceptedRequest with the validated origin, source IP and user agent.

        Raises:
            RequestRejectedError: On the first failing check.
        """
        origin = get_header(headers, "origin")
        user_agent = get_header(headers, "user-agent") or ""
        referer = get_header(headers, "referer") or ""
        source_ip = source_ip or UNKNOWN_SOURCE_IP

        if not origin:
            raise self._reject(
                code="missing_origin",
                message="Missing origin header",
                http_status=400,
                origin=origin,
                user_agent=user_agent,
                source_ip=source_ip,
            )

        if not self.is_origin_allowed(origin):
            raise self._reject(
                code="origin_not_allowed",
                message=f'Origin "{origin}" is not authorized',
                http_status=403,
                origin=origin,
                user_agent=user_agent,
                source_ip=source_ip,
            )

        if len(user_agent) < self.min_user_agent_length:
            raise self._reject(
                code="invalid_user_agent",
                message="Invalid user agent",
                http_status=403,
                origin=origin,
                user_agent=user_agent,
                source_ip=source_ip,
            )

        matched = self.bot_matcher.first_match(user_agent)
        if matched is not None:
            raise self._reject(
                code="automated_request",
                message="Automated requests not allowed",
                http_status=403,
                origin=origin,
                user_agent=user_agent,
                source_ip=source_ip,
                matched_pattern=matched,
            )

        if referer and not referer.startswith(origin):
            logger.warning(
                "visit.referer_mismatch",
                extra={"origin": origin, "referer": referer, "source_ip": source_ip},
            )

        logger.info(
            "visit.accepted",
            extra={"origin": origin, "source_ip": source_ip, "user_agent": user_agent},
        )
        return AcceptedRequest(origin=origin, source_ip=source_ip, user_agent=user_agent)
