"""
==============================================================================
Scan Aggregator Module
==============================================================================

Online aggregation of noisy barcode observations into a single decision.

Features:
---------
- Error-score gate ahead of checksum validation
- Accepted / rejected frequency tables scoped to one scanning session
- Wholesale reclassification after every observation
- Automatic stop once the classification converges
- Session timing for throughput metrics

Session Lifecycle:
-----------------
    start_session()  -> tables and timing cleared, scanning on
    record_observation() ... converges -> scanning off, snapshot frozen
    stop_session()   -> scanning off, snapshot frozen
    start_session()  -> fresh session

==============================================================================
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Union

from scan_aggregator.config import Settings, get_settings
from scan_aggregator.core import exceptions
from scan_aggregator.core.exceptions import AppException
from scan_aggregator.schemas import ScanSnapshot, SessionTiming, ValidationResult
from scan_aggregator.utils import BarcodeValidator, ObservationValidator

from .classifier import Classification, classify_codes


# Module logger
logger = logging.getLogger(__name__)


Validator = Callable[[str, str], Union[ValidationResult, Mapping[str, Any]]]
SnapshotSink = Callable[[ScanSnapshot], None]
Clock = Callable[[], float]


def monotonic_ms() -> float:
    """Monotonic clock in milliseconds."""
    return time.monotonic() * 1000


class ScanAggregator:
    """
    Statistical aggregator for one stream of barcode observations.

    Owns the accepted and rejected frequency tables and the session timing.
    All public operations are serialized behind one re-entrant lock, so the
    decoder may call in from worker threads.

    Attributes:
        scanning: Whether the current session still accepts observations
        session_id: Identifier of the current session

    Example:
        >>> aggregator = ScanAggregator(sink=print)
        >>> for _ in range(6):
        ...     aggregator.record_observation("012345678905", 0.05)
        >>> aggregator.scanning
        False
        >>> aggregator.recompute_classification().best_code
        '012345678905'
    """

    def __init__(
        self,
        validator: Optional[Validator] = None,
        sink: Optional[SnapshotSink] = None,
        settings: Optional[Settings] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        """
        Initialize the aggregator and start the first session.

        Args:
            validator: ``validate(code, symbology)`` callable (bundled
                BarcodeValidator if None)
            sink: Receives a snapshot after every update
            settings: Thresholds and symbology (global settings if None)
            clock: Millisecond clock (monotonic if None)
        """
        self._settings = settings or get_settings()
        self._validator = validator or BarcodeValidator().validate
        self._sink = sink
        self._clock = clock or monotonic_ms
        self._observation_check = ObservationValidator()
        self._lock = threading.RLock()

        self._accepted: Dict[str, int] = {}
        self._rejected: Dict[str, int] = {}
        self._observation_total = 0
        self._rejected_total = 0
        self._started_at: Optional[float] = None
        self._elapsed_ms = 0.0

        self._session_id = 0
        self._scanning = False

        self.start_session()

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def scanning(self) -> bool:
        """Whether the capture pipeline should keep feeding observations."""
        with self._lock:
            return self._scanning

    @property
    def session_id(self) -> int:
        """Identifier of the current session."""
        with self._lock:
            return self._session_id

    # =========================================================================
    # SESSION METHODS
    # =========================================================================

    def start_session(self) -> None:
        """Discard all session state and start scanning."""
        with self._lock:
            self._accepted.clear()
            self._rejected.clear()
            self._observation_total = 0
            self._rejected_total = 0
            self._started_at = None
            self._elapsed_ms = 0.0
            self._session_id += 1
            self._scanning = True

            logger.info(f"🚀 Scan session {self._session_id} started")
            self._publish(self._build_snapshot(self._classify()))

    def stop_session(self) -> None:
        """Stop scanning and freeze the current snapshot."""
        with self._lock:
            if self._scanning:
                self._scanning = False
                logger.info(
                    f"🛑 Scan session {self._session_id} stopped after "
                    f"{self._observation_total} observations"
                )
            self._publish(self._build_snapshot(self._classify()))

    # =========================================================================
    # OBSERVATION METHODS
    # =========================================================================

    def record_observation(self, raw_code: str, error_score: float) -> None:
        """
        Record one decoder observation and reclassify.

        Observations arriving after the session stopped are ignored.

        Args:
            raw_code: Decoded string
            error_score: Decoder error score
        """
        with self._lock:
            if not self._scanning:
                logger.debug(f"Ignoring {raw_code!r}: session {self._session_id} is stopped")
                return

            try:
                code, accepted = self._resolve(raw_code, error_score)
                self._count(code, accepted)

                classification = self._classify()
                if classification.should_stop:
                    self._scanning = False
                    leader = classification.entries[0]
                    logger.info(
                        f"✅ Converged on {leader.code} ({leader.status}) after "
                        f"{self._observation_total} observations in "
                        f"{self._elapsed_ms / 1000:.2f}s"
                    )

                self._publish(self._build_snapshot(classification))

            except Exception as e:
                logger.error(f"Observation processing error: {e}")

    def recompute_classification(self) -> ScanSnapshot:
        """
        Classify the accepted table as it stands.

        Read-only: while stopped this returns the frozen snapshot.

        Returns:
            Current ScanSnapshot
        """
        with self._lock:
            return self._build_snapshot(self._classify())

    # =========================================================================
    # INTERNAL METHODS
    # =========================================================================

    def _resolve(self, raw_code: Any, error_score: Any) -> Tuple[str, bool]:
        """Decide the table and code an observation is counted under."""
        try:
            observation = self._observation_check.check(raw_code, error_score)
        except AppException as e:
            logger.warning(f"⚠️ {e.message}")
            if isinstance(raw_code, str) and raw_code:
                return raw_code, False
            return self._settings.malformed_marker, False

        if observation.error_score > self._settings.error_threshold:
            logger.debug(
                f"Rejected {observation.raw_code}: error score {observation.error_score:.3f}"
            )
            return observation.raw_code, False

        try:
            result = self._validator(observation.raw_code, self._settings.symbology)
            if not isinstance(result, ValidationResult):
                result = ValidationResult.model_validate(result)
        except Exception as e:
            fault = exceptions.validator_fault(observation.raw_code, e)
            logger.error(f"❌ {fault.message}")
            return observation.raw_code, False

        if not result.modified_code:
            return self._settings.malformed_marker, False

        return result.modified_code, result.valid

    def _count(self, code: str, accepted: bool) -> None:
        """Update counters, timing and the chosen frequency table."""
        now = self._clock()

        self._observation_total += 1
        if not accepted:
            self._rejected_total += 1

        if self._started_at is None:
            self._started_at = now
        self._elapsed_ms = max(0.0, now - self._started_at)

        table = self._accepted if accepted else self._rejected
        table[code] = table.get(code, 0) + 1

    def _classify(self) -> Classification:
        """Classify the accepted table with the configured thresholds."""
        return classify_codes(
            self._accepted,
            perfect_min_count=self._settings.perfect_min_count,
            min_spread=self._settings.min_spread,
            cluster_width=self._settings.cluster_width,
        )

    def _build_snapshot(self, classification: Classification) -> ScanSnapshot:
        """Project current state into an immutable snapshot."""
        timing = SessionTiming(
            accepted_total=self._observation_total - self._rejected_total,
            rejected_total=self._rejected_total,
            started_at=self._started_at,
            elapsed_ms=self._elapsed_ms,
        )
        return ScanSnapshot(
            session_id=self._session_id,
            ranked_entries=classification.entries,
            rejected_entries=dict(self._rejected),
            timing=timing,
            should_continue_scanning=not classification.should_stop,
            scanning=self._scanning,
        )

    def _publish(self, snapshot: ScanSnapshot) -> None:
        """Hand a snapshot to the display sink."""
        if self._sink is None:
            return
        try:
            self._sink(snapshot)
        except Exception as e:
            logger.error(f"Display sink error: {e}")
