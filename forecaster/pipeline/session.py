"""Query session: only the most recently submitted query's outcome is applied.

Each submission takes a generation token from a monotonically increasing
counter. When a lookup finishes after a newer submission, its outcome is
dropped instead of replacing the newer query's state.
"""

import itertools
import logging
import threading
from dataclasses import dataclass

from forecaster.errors import ForecastError
from forecaster.models.forecast import ForecastResult
from forecaster.pipeline.forecast_pipeline import ForecastPipeline

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ForecastOutcome:
    token: int
    query: str
    result: ForecastResult | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class QuerySequencer:
    def __init__(self):
        self._counter = itertools.count(1)
        self._latest = 0
        self._lock = threading.Lock()

    def issue(self) -> int:
        with self._lock:
            self._latest = next(self._counter)
            return self._latest

    def is_latest(self, token: int) -> bool:
        with self._lock:
            return token == self._latest


class ForecastSession:
    def __init__(self, pipeline: ForecastPipeline):
        self.pipeline = pipeline
        self.sequencer = QuerySequencer()
        self._latest: ForecastOutcome | None = None
        self._lock = threading.Lock()

    @property
    def latest(self) -> ForecastOutcome | None:
        return self._latest

    def submit(self, query: str) -> ForecastOutcome | None:
        """Run a lookup; returns None if a newer query superseded this one."""
        token = self.sequencer.issue()
        try:
            result = self.pipeline.fetch_forecast(query)
            outcome = ForecastOutcome(token=token, query=query, result=result)
        except ForecastError as e:
            outcome = ForecastOutcome(token=token, query=query, error=str(e))

        with self._lock:
            if not self.sequencer.is_latest(token):
                logger.info("Discarding superseded result for %r (token %d)", query, token)
                return None
            self._latest = outcome
        return outcome
