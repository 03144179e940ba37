"""
RESPONSE ENVELOPE
=================

Every response has the same shape:

    {"status": {"id": 200, "errors": null}, "data": {...}}

Error responses drop the "data" key and list human readable messages
in "errors".
"""

from flask import jsonify


def envelope(status_id, errors=None, data=None):
    body = {'status': {'id': status_id, 'errors': errors}}
    if errors is None:
        body['data'] = data
    return body


def json_success(data=None, status_id=200):
    return jsonify(envelope(status_id, None, data)), status_id


def json_error(status_id, errors):
    if isinstance(errors, str):
        errors = [errors]
    return jsonify(envelope(status_id, list(errors))), status_id


def json_not_found():
    return json_error(404, 'Not Found')


def json_internal_error():
    """Generic 500. Never carries the underlying error."""
    return json_error(500, 'Internal Server Error')
