"""
Request ID tracking.

Reuses an incoming X-Request-ID or generates one, keeps it on g for log
lines and echoes it on the response.
"""
import uuid
from flask import Flask, request, g

REQUEST_ID_HEADER = 'X-Request-ID'


def init_request_id_tracking(app: Flask) -> None:
    @app.before_request
    def assign_request_id():
        incoming = request.headers.get(REQUEST_ID_HEADER, '')
        g.request_id = incoming[:64] if incoming else uuid.uuid4().hex

    @app.after_request
    def echo_request_id(response):
        request_id = getattr(g, 'request_id', None)
        if request_id:
            response.headers[REQUEST_ID_HEADER] = request_id
        return response
