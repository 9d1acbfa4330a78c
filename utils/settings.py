# utils/settings.py
# This file is part of Procov - Process Model Test Coverage
#
# Configuration for coverage collection and assertion

"""
Coverage settings module for managing collection and assertion options.
"""

import os
from dataclasses import dataclass, field, replace
from typing import FrozenSet, List, Mapping, Optional

from utils.logger import get_logger

AT_LEAST_ENV = "PROCESS_COVERAGE_AT_LEAST"
EXCLUDE_ENV = "PROCESS_COVERAGE_EXCLUDE"
DETAILED_LOGGING_ENV = "PROCESS_COVERAGE_DETAILED_LOGGING"

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class CoverageSettings:
    """Configuration for a coverage session.

    Attributes:
        excluded_model_keys: Model keys left out of every ratio
        detailed_logging: Log class and method coverages
        handle_method_coverage: Evaluate per-method coverage and its conditions
        class_coverage_at_least: Minimal class coverage ratio, if any
    """

    excluded_model_keys: FrozenSet[str] = field(default_factory=frozenset)
    detailed_logging: bool = False
    handle_method_coverage: bool = True
    class_coverage_at_least: Optional[float] = None

    def validate(self) -> List[str]:
        """Validate configuration settings and return list of errors."""
        errors = []

        if self.class_coverage_at_least is not None and not 0.0 <= self.class_coverage_at_least <= 1.0:
            errors.append("Class coverage threshold must be between 0 and 1")

        if any(not key.strip() for key in self.excluded_model_keys):
            errors.append("Excluded model keys must not be blank")

        return errors

    def is_valid(self) -> bool:
        """Check if configuration is valid."""
        return len(self.validate()) == 0

    def with_overrides(self, **changes) -> "CoverageSettings":
        """Return a copy with the given fields replaced."""
        if "excluded_model_keys" in changes:
            changes["excluded_model_keys"] = frozenset(changes["excluded_model_keys"])
        return replace(self, **changes)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, base: Optional["CoverageSettings"] = None) -> "CoverageSettings":
        """Build settings from environment variables on top of `base`.

        PROCESS_COVERAGE_AT_LEAST is a ratio ("0.8") or percentage ("80%"),
        PROCESS_COVERAGE_EXCLUDE a comma separated list of model keys, and
        PROCESS_COVERAGE_DETAILED_LOGGING a boolean flag.

        Raises:
            ValueError: If the threshold cannot be read as a number
        """
        environ = os.environ if environ is None else environ
        settings = base or cls()
        logger = get_logger()

        at_least = environ.get(AT_LEAST_ENV, "").strip()
        if at_least:
            settings = settings.with_overrides(class_coverage_at_least=_parse_ratio(at_least))
            logger.debug(f"Class coverage threshold from {AT_LEAST_ENV}: {settings.class_coverage_at_least}")

        excluded = environ.get(EXCLUDE_ENV, "")
        keys = {key.strip() for key in excluded.split(",") if key.strip()}
        if keys:
            settings = settings.with_overrides(excluded_model_keys=settings.excluded_model_keys | keys)
            logger.debug(f"Excluded models from {EXCLUDE_ENV}: {sorted(keys)}")

        detailed = environ.get(DETAILED_LOGGING_ENV)
        if detailed is not None:
            settings = settings.with_overrides(detailed_logging=detailed.strip().lower() in _TRUE_VALUES)

        return settings


def _parse_ratio(text: str) -> float:
    """Read '0.8' or '80%' as a ratio."""
    try:
        if text.endswith("%"):
            return float(text[:-1]) / 100
        return float(text)
    except ValueError:
        raise ValueError(f"Invalid coverage threshold: {text!r}") from None
