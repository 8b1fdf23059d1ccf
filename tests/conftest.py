"""Shared fakes and fixtures for ltc tests."""

from datetime import datetime

import pytest
import requests

from ltc.models import ImageMetadata


class RecordingUI:
    """UI that records everything said, in order."""

    def __init__(self):
        self.output = []

    def say(self, message, style=None):
        self.output.append(message)

    def say_line(self, message, style=None):
        self.output.append(message + "\n")

    def say_new_line(self):
        self.output.append("\n")

    def say_incorrect_usage(self, message):
        self.output.append(f"Incorrect Usage: {message}\n")

    @property
    def text(self):
        return "".join(self.output)


class FakeClock:
    """Clock whose time only moves when sleep() is called."""

    def __init__(self, start=datetime(2015, 7, 1, 12, 0, 0)):
        self.current = start
        self.sleeps = []

    def now(self):
        return self.current

    def sleep(self, duration):
        self.sleeps.append(duration)
        self.current += duration


class FakeAppExaminer:
    """
    Returns scripted (running, placement_error) responses.

    The last response repeats forever. A response that is an exception
    instance is raised instead of returned.
    """

    def __init__(self, *responses):
        self.responses = list(responses) or [(0, False)]
        self.calls = []

    def running_app_instances_info(self, name):
        self.calls.append(name)
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        return response


class FakeAppRunner:
    def __init__(self, error=None):
        self.error = error
        self.created = []
        self.scaled = []

    def create_docker_app(self, params):
        if self.error:
            raise self.error
        self.created.append(params)

    def scale_app(self, name, instances):
        if self.error:
            raise self.error
        self.scaled.append((name, instances))


class FakeMetadataFetcher:
    def __init__(self, metadata=None, error=None):
        self.metadata = metadata or ImageMetadata(start_command=["/start"])
        self.error = error
        self.fetched = []

    def fetch_metadata(self, image):
        self.fetched.append(image)
        if self.error:
            raise self.error
        return self.metadata


class FakeLogsOutputter:
    def __init__(self):
        self.started = []
        self.stop_count = 0

    def output_tailed_logs(self, name):
        self.started.append(name)

    def stop_outputting(self):
        self.stop_count += 1


class FakeResponse:
    def __init__(self, status_code=200, json_data=None, headers=None, text=""):
        self.status_code = status_code
        self._json = json_data
        self.headers = headers or {}
        self.text = text

    def json(self):
        if self._json is None:
            raise ValueError("No JSON body")
        return self._json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"HTTP {self.status_code}")


class FakeSession:
    """
    Minimal requests.Session stand-in.

    Routes are keyed by (METHOD, url); each key holds a list of responses
    that are returned in order, the last one repeating.
    """

    def __init__(self, routes=None):
        self.routes = routes or {}
        self.requests = []
        self.auth = None

    def request(self, method, url, **kwargs):
        self.requests.append((method, url, kwargs))
        responses = self.routes.get((method, url))
        if responses is None:
            return FakeResponse(404, {"message": "not found"})
        if isinstance(responses, Exception):
            raise responses
        return responses.pop(0) if len(responses) > 1 else responses[0]

    def get(self, url, **kwargs):
        return self.request("GET", url, **kwargs)


@pytest.fixture
def ui():
    return RecordingUI()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def logs_outputter():
    return FakeLogsOutputter()


@pytest.fixture
def app_runner():
    return FakeAppRunner()
