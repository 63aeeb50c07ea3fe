"""Test helpers."""

from .fakes import FakeProvider, RecordingPresenter, make_words
from .metric_delta import histogram_observes, metric_delta

__all__ = ["FakeProvider", "RecordingPresenter", "histogram_observes", "make_words", "metric_delta"]
