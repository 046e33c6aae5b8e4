"""Unit tests for RequestIDMiddleware."""

import unittest
import uuid

from django.http import HttpRequest, HttpResponse

from core.constants import REQUEST_ID_HEADER
from core.logging.context import get_request_id
from core.middleware.request_id import RequestIDMiddleware


class TestRequestIDMiddleware(unittest.TestCase):
    """Test cases for RequestIDMiddleware."""

    def setUp(self):
        """Set up test fixtures."""
        self.seen_request_ids = []

        def get_response(request):
            self.seen_request_ids.append(get_request_id())
            return HttpResponse("OK")

        self.middleware = RequestIDMiddleware(get_response)

    def _create_request(self, request_id=None):
        request = HttpRequest()
        request.method = "GET"
        request.path = "/test/"
        if request_id is not None:
            request.META["HTTP_X_REQUEST_ID"] = request_id
        return request

    def test_generates_uuid_when_absent(self):
        """Test that a UUID is assigned when no header is sent."""
        request = self._create_request()

        response = self.middleware(request)

        uuid.UUID(request.request_id)
        self.assertEqual(response[REQUEST_ID_HEADER], request.request_id)

    def test_reuses_valid_incoming_id(self):
        """Test that a well-formed header is propagated."""
        request = self._create_request("edge-1234.abc")

        response = self.middleware(request)

        self.assertEqual(response[REQUEST_ID_HEADER], "edge-1234.abc")

    def test_replaces_malformed_incoming_id(self):
        """Test that ids with unsafe characters are replaced."""
        request = self._create_request("bad id\nwith newline")

        self.middleware(request)

        self.assertNotEqual(request.request_id, "bad id\nwith newline")
        uuid.UUID(request.request_id)

    def test_request_id_visible_during_and_cleared_after(self):
        """Test the thread-local lifecycle."""
        request = self._create_request("trace-1")

        self.middleware(request)

        self.assertEqual(self.seen_request_ids, ["trace-1"])
        self.assertIsNone(get_request_id())
