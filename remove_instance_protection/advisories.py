"""Severity-levelled advisory records emitted while planning and applying changes."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

DRYRUN = 45
logging.addLevelName(DRYRUN, "DRYRUN")

LOGGER = logging.getLogger("remove_instance_protection")

# Accepted --log-level names, lowest first. DRYRUN sits above ERROR so that
# simulated changes are still shown when only errors are requested.
SEVERITY_LEVELS: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "DRYRUN": DRYRUN,
}


@dataclass(frozen=True)
class Advisory:
    """A single record of what the tool decided, did, or would have done."""

    severity: str
    message: str
    instance_id: Optional[str] = None
    target_group: Optional[str] = None


class AdvisoryStream:
    """Collects advisories and forwards each one to :mod:`logging`."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or LOGGER
        self._records: List[Advisory] = []

    def emit(
        self,
        severity: str,
        message: str,
        *,
        instance_id: Optional[str] = None,
        target_group: Optional[str] = None,
    ) -> Advisory:
        severity = severity.upper()
        if severity not in SEVERITY_LEVELS:
            valid = ", ".join(SEVERITY_LEVELS)
            raise ValueError(f"Unknown severity '{severity}'. Valid severities: {valid}")
        advisory = Advisory(
            severity=severity,
            message=message,
            instance_id=instance_id,
            target_group=target_group,
        )
        self._records.append(advisory)
        self._logger.log(SEVERITY_LEVELS[severity], message)
        return advisory

    def debug(self, message: str, **kwargs: Optional[str]) -> Advisory:
        return self.emit("DEBUG", message, **kwargs)

    def info(self, message: str, **kwargs: Optional[str]) -> Advisory:
        return self.emit("INFO", message, **kwargs)

    def warn(self, message: str, **kwargs: Optional[str]) -> Advisory:
        return self.emit("WARN", message, **kwargs)

    def dryrun(self, message: str, **kwargs: Optional[str]) -> Advisory:
        return self.emit("DRYRUN", message, **kwargs)

    @property
    def records(self) -> List[Advisory]:
        return list(self._records)

    def by_severity(self, severity: str) -> List[Advisory]:
        severity = severity.upper()
        return [record for record in self._records if record.severity == severity]

    def __iter__(self) -> Iterator[Advisory]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)


__all__ = ["DRYRUN", "SEVERITY_LEVELS", "Advisory", "AdvisoryStream"]
