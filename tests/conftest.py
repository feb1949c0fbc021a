"""
Shared fixtures for the metrics SDK tests.
"""
import json
from unittest import mock

import pytest
import requests

from tsdb_sdk import Metric

SERVER_URL = 'http://tsdb.example:4242'


def make_response(status_code=204, reason='No Content', body=b''):
    """Build a requests.Response without touching the network."""
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    response._content = body
    response.encoding = 'utf-8'
    return response


def sent_batches(request_mock):
    """Decode the JSON body of every recorded request."""
    return [json.loads(call.kwargs['data']) for call in request_mock.call_args_list]


@pytest.fixture
def request_mock():
    with mock.patch('tsdb_sdk.metrics_sdk.requests.request') as patched:
        patched.return_value = make_response()
        yield patched


@pytest.fixture
def metric_factory():
    def build(name='sys.cpu.user', value=1, tags=None, timestamp=1700000000):
        return Metric(
            timestamp=timestamp,
            metric=name,
            value=value,
            tags={'host': 'web01'} if tags is None else tags
        )
    return build
