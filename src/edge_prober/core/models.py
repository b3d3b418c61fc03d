"""Data models for Edge Prober."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Protocol(str, Enum):
    """Transport protocols the prober knows how to check."""

    TCP = "TCP"
    UDP = "UDP"

    @classmethod
    def parse(cls, value: str) -> Protocol | None:
        """Return the member for ``value`` or None if it is not recognised."""
        try:
            return cls(value.strip().upper())
        except ValueError:
            return None


class ProbeOutcome(str, Enum):
    """Classification of a single probe."""

    PASSED = "passed"
    FAILED = "failed"
    SKIPPED_UNKNOWN_PROTOCOL = "skipped_unknown_protocol"


class ProbeTarget(BaseModel):
    """A (hostname, port, protocol, description) tuple to probe."""

    model_config = ConfigDict(frozen=True)

    hostname: str = Field(
        ...,
        min_length=1,
        description="DNS name or literal IPv4/IPv6 address",
    )
    port: int = Field(..., ge=1, le=65535, description="Destination port")
    protocol: str = Field(
        ...,
        description="TCP or UDP; other values are kept and reported as skipped",
    )
    description: str = Field(default="", description="Free-text label for reporting")

    @field_validator("hostname")
    @classmethod
    def _strip_hostname(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("hostname must not be empty")
        return value

    @field_validator("protocol")
    @classmethod
    def _normalize_protocol(cls, value: str) -> str:
        return value.strip().upper()

    @property
    def known_protocol(self) -> Protocol | None:
        """The parsed protocol, or None for an unrecognised value."""
        return Protocol.parse(self.protocol)

    @classmethod
    def parse_line(cls, line: str) -> ProbeTarget:
        """Parse a ``hostname,port,protocol,description`` record.

        The description is everything after the third comma, so it may
        itself contain commas.
        """
        parts = [part.strip() for part in line.split(",", 3)]
        if len(parts) < 3:
            raise ValueError(
                f"expected 'hostname,port,protocol[,description]', got {line!r}"
            )
        try:
            port = int(parts[1])
        except ValueError:
            raise ValueError(f"invalid port {parts[1]!r}") from None
        return cls(
            hostname=parts[0],
            port=port,
            protocol=parts[2],
            description=parts[3] if len(parts) > 3 else "",
        )

    def __str__(self) -> str:
        return f"{self.hostname}:{self.port}/{self.protocol}"


class ProbeResult(BaseModel):
    """Result of probing one target."""

    target: ProbeTarget
    outcome: ProbeOutcome
    elapsed_ms: float | None = Field(
        default=None,
        description="Wall time spent on the probe in milliseconds",
    )
    detail: str | None = Field(
        default=None,
        description="Short failure cause; never shown in the text report",
    )

    @property
    def passed(self) -> bool:
        return self.outcome == ProbeOutcome.PASSED

    @property
    def failed(self) -> bool:
        return self.outcome == ProbeOutcome.FAILED

    @property
    def skipped(self) -> bool:
        return self.outcome == ProbeOutcome.SKIPPED_UNKNOWN_PROTOCOL


class RunReport(BaseModel):
    """Complete probe run report."""

    # Metadata
    run_id: str = Field(..., description="Unique run identifier")
    started_at: datetime
    completed_at: datetime | None = None
    duration_seconds: float = 0.0

    # Results, in target order
    results: list[ProbeResult] = Field(default_factory=list)

    @property
    def passed(self) -> int:
        return sum(1 for r in self.results if r.passed)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if r.failed)

    @property
    def skipped(self) -> int:
        return sum(1 for r in self.results if r.skipped)

    @property
    def any_failed(self) -> bool:
        return any(r.failed for r in self.results)

    def exit_code(self, strict: bool = False) -> int:
        """Process exit status for this run.

        Failed probes only affect the exit status in strict mode.
        """
        if strict and self.any_failed:
            return 1
        return 0

    def summary(self) -> dict[str, Any]:
        """Generate a summary of outcomes."""
        return {
            "run_id": self.run_id,
            "duration_seconds": self.duration_seconds,
            "targets": len(self.results),
            "passed": self.passed,
            "failed": self.failed,
            "skipped": self.skipped,
        }
