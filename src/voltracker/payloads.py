"""Upstream payload shapes, resolved once at ingestion.

The dashboard backend answers either with a single flat payload, or with a
payload accompanied by an "analysis" payload (sent separately or embedded
under an ``"analysis"`` key). ``ingest`` turns whatever arrived into one of
two typed shapes so nothing downstream has to sniff dictionaries again.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Union

from voltracker.errors import ErrorCode, VolatilityEngineError

RawPayload = Mapping[str, Any]


@dataclass(frozen=True)
class PrimaryOnly:
    """Primary payload with no analysis block."""

    primary: RawPayload


@dataclass(frozen=True)
class PrimaryWithAnalysis:
    """Primary payload plus an analysis payload."""

    primary: RawPayload
    analysis: RawPayload


Payload = Union[PrimaryOnly, PrimaryWithAnalysis]


def ingest(primary: RawPayload | None, analysis: RawPayload | None = None) -> Payload:
    """Classify raw payloads into ``PrimaryOnly`` or ``PrimaryWithAnalysis``.

    Raises:
        VolatilityEngineError: ``UPSTREAM_UNAVAILABLE`` if ``primary`` is not
            a mapping (the fetch produced nothing usable).
    """
    if not isinstance(primary, Mapping):
        raise VolatilityEngineError(
            "Primary payload is missing or not an object",
            code=ErrorCode.UPSTREAM_UNAVAILABLE,
        )

    if analysis is None:
        embedded = primary.get("analysis")
        if isinstance(embedded, Mapping):
            analysis = embedded

    if isinstance(analysis, Mapping):
        return PrimaryWithAnalysis(primary=primary, analysis=analysis)
    return PrimaryOnly(primary=primary)


def analysis_of(payload: Payload) -> RawPayload:
    """Analysis mapping of ``payload`` (empty for ``PrimaryOnly``)."""
    if isinstance(payload, PrimaryWithAnalysis):
        return payload.analysis
    return {}
