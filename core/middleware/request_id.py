"""Request ID middleware for tracing a request through the logs."""

import re
import uuid
from collections.abc import Callable

from django.http import HttpRequest, HttpResponse

from core.constants import REQUEST_ID_HEADER
from core.logging.context import clear_request_id, set_request_id

# Accept caller-supplied ids only if they are short and printable
REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")


class RequestIDMiddleware:
    """Middleware to propagate or assign a request ID.

    An incoming X-Request-ID header is reused when it looks like an id;
    otherwise a UUID is generated. The id is kept in thread-local storage
    for the log processors, set on ``request.request_id`` and echoed in the
    response header.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        """Initialize the middleware.

        Args:
            get_response: The next middleware or view in the chain.
        """
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """Process the request with request ID tracking."""
        request_id = request.headers.get(REQUEST_ID_HEADER, "")
        if not REQUEST_ID_PATTERN.match(request_id):
            request_id = str(uuid.uuid4())

        set_request_id(request_id)
        request.request_id = request_id  # type: ignore[attr-defined]

        try:
            response = self.get_response(request)
            response[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            clear_request_id()
