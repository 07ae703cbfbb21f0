import datetime

import pytest

from mf2publisher import Formatter, FormatterConfig

UTC = datetime.timezone.utc
NOW = datetime.datetime(2015, 6, 30, 14, 20, 0, tzinfo=UTC)
PUBLISHED = datetime.datetime(2015, 6, 30, 14, 34, 1, tzinfo=UTC)


def fixed_clock():
    return NOW


def make_formatter(**options) -> Formatter:
    detector = options.pop("language_detector", None)
    return Formatter(FormatterConfig(**options), language_detector=detector, clock=fixed_clock)


class FakeDetector:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    def detect(self, text):
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def entry():
    return {
        "type": ["h-entry"],
        "properties": {
            "content": ["hello world"],
            "name": ["awesomeness is awesome"],
            "slug": ["awesomeness-is-awesome"],
            "published": [PUBLISHED],
        },
    }


@pytest.fixture
def formatter():
    return make_formatter(permalink_style="/:categories/:year/:month/:title/")
