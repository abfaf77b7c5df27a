"""
Success/error envelopes returned by every engine operation.

    {success, data?, error?: {code, message, details}, metadata}

metadata carries the layer id and name, processing time in ms and an ISO
timestamp. Payloads with a to_dict() method are serialized on to_dict().
"""

import time
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from jobscout.exceptions import JobDiscoveryError
from jobscout.utils.timestamp import now_exact

LAYER_ID = 6
LAYER_NAME = "Job Discovery"

T = TypeVar("T")


@dataclass(frozen=True)
class EnvelopeMetadata:
    processing_time_ms: int
    timestamp: str
    layer_id: int = LAYER_ID
    layer_name: str = LAYER_NAME

    def to_dict(self) -> dict[str, Any]:
        return {
            "layerId": self.layer_id,
            "layerName": self.layer_name,
            "processingTimeMs": self.processing_time_ms,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class Envelope(Generic[T]):
    success: bool
    metadata: EnvelopeMetadata
    data: Optional[T] = None
    error: Optional[JobDiscoveryError] = None

    def unwrap(self) -> T:
        """Payload of a successful envelope; raises the carried error otherwise."""
        if self.error is not None:
            raise self.error
        return self.data

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"success": self.success}
        if self.data is not None:
            result["data"] = self.data.to_dict() if hasattr(self.data, "to_dict") else self.data
        if self.error is not None:
            result["error"] = self.error.to_dict()
        result["metadata"] = self.metadata.to_dict()
        return result


def elapsed_ms(started: float) -> int:
    """Milliseconds since a time.perf_counter() reading."""
    return round((time.perf_counter() - started) * 1000)


def _metadata(started: float) -> EnvelopeMetadata:
    return EnvelopeMetadata(processing_time_ms=elapsed_ms(started), timestamp=now_exact())


def success_envelope(data: T, started: float) -> Envelope[T]:
    return Envelope(success=True, data=data, metadata=_metadata(started))


def error_envelope(error: JobDiscoveryError, started: float) -> Envelope:
    return Envelope(success=False, error=error, metadata=_metadata(started))
