import json
import logging
import functools
from datetime import datetime
from typing import Any

from linktracker.dao.base import LinkBaseDAO
from linktracker.dao.factory import create_link_dao
from linktracker.registry import LinkRegistry
from linktracker.utils import load_config, app_prefix, base_url
from linktracker.utils.helpers import guarantee_500_response
from linktracker.lambdas.responses import response_201, response_400
from linktracker.utils.constants import INVALID_JSON_BODY, MISSING_URL, INVALID_EXPIRATION, INVALID_PASSWORD, LINK_CREATED


logger = logging.getLogger(__name__)


@functools.cache
def link_dao() -> LinkBaseDAO:
    """Link DAO shared by all invocations served by this Lambda container"""
    return create_link_dao(load_config('create_link'), prefix=app_prefix())


@guarantee_500_response
def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Handle incoming API Gateway requests to create (or re-register) links

    This Lambda handler follows this procedure:
    - Step 1: Parse the JSON request body
    - Step 2: Extract the original URL, password and expiration date
    - Step 3: Create the link, or reuse the valid link registered for the URL
    - Step 4: Respond to user with 201 and the link

    HTTP responses:
        201: Link created (or updated)
            body: link JSON (see LinkModel.to_dict())
        400: Bad client request
            message: invalid JSON, missing 'url', non-string 'password' or unparsable 'expiration'
        500: Internal server error

    Example:
        >>> event = {'body': '{"url": "https://example.com", "password": "12345"}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        201
        >>> json.loads(response['body'])['password_protected']
        True
    """
    # 1- Parse request body
    try:
        request_body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON_BODY})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON_BODY)
    if not isinstance(request_body, dict):
        logger.info('JSON body is not an object. Responding with 400.', extra={'event': INVALID_JSON_BODY})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON_BODY)

    # 2- Extract link parameters
    original_url = request_body.get('url')
    if not original_url or not isinstance(original_url, str):
        logger.info('Missing "url" in body. Responding with 400.', extra={'event': MISSING_URL})
        return response_400(message="missing 'url' in JSON body", error_code=MISSING_URL)

    password = request_body.get('password')
    if password is not None and not isinstance(password, str):
        logger.info('Non-string "password" in body. Responding with 400.', extra={'event': INVALID_PASSWORD})
        return response_400(message="'password' must be a string", error_code=INVALID_PASSWORD)
    password = password or None  # empty password means no password
    expiration = request_body.get('expiration')
    expiration_date = None
    if expiration:
        try:
            expiration_date = datetime.fromisoformat(expiration)
        except (TypeError, ValueError):
            logger.info('Unparsable "expiration" in body. Responding with 400.', extra={'event': INVALID_EXPIRATION})
            return response_400(message="'expiration' must be an ISO 8601 date", error_code=INVALID_EXPIRATION)

    # 3- Create link (or reuse the valid one registered for the URL)
    registry = LinkRegistry(link_dao(), base_url=base_url(event))
    link = registry.create(original_url, password=password, expiration_date=expiration_date)

    # 4- Respond with the link
    logger.info('Link created. Responding with 201.', extra={'code': link.code, 'event': LINK_CREATED})
    return response_201(link.to_dict())
