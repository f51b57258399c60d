"""API Gateway Lambda proxy responses shared by all link handlers"""

import json
from typing import Any


def _response(status_code: int, body: dict[str, Any], headers: dict[str, str] | None = None) -> dict:
    response = {
        'statusCode': status_code,
        'headers': {'Content-Type': 'application/json', **(headers or {})},
        'body': json.dumps(body),
    }
    return response


def response_200(body: dict[str, Any] | None = None) -> dict:
    return _response(200, body or {})


def response_201(body: dict[str, Any]) -> dict:
    return _response(201, body)


def response_302(*, location: str) -> dict:
    return {
        'statusCode': 302,
        'headers': {'Location': location},
        'body': json.dumps({}),  # no body needed for redirects
    }


def response_400(message: str | None = None, error_code: str | None = None) -> dict:
    base = 'Bad Request'
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return _response(400, body)


def response_403(error_code: str | None = None) -> dict:
    body = {'message': 'Forbidden'}
    if error_code:
        body['errorCode'] = error_code
    return _response(403, body)


def response_404(message: str | None = None, error_code: str | None = None) -> dict:
    body = {'message': message or 'Not Found'}
    if error_code:
        body['errorCode'] = error_code
    return _response(404, body)
