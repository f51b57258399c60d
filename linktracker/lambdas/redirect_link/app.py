import logging
import functools
from typing import Any

from linktracker.dao.base import LinkBaseDAO
from linktracker.dao.factory import create_link_dao
from linktracker.exceptions import LinkNotFoundError, LinkForbiddenError
from linktracker.registry import LinkRegistry, check_password
from linktracker.utils import load_config, app_prefix, base_url
from linktracker.utils.helpers import guarantee_500_response
from linktracker.lambdas.responses import response_302, response_400, response_403, response_404
from linktracker.utils.constants import MISSING_CODE, LINK_NOT_FOUND, LINK_FORBIDDEN, REDIRECT_SUCCESS


logger = logging.getLogger(__name__)


@functools.cache
def link_dao() -> LinkBaseDAO:
    """Link DAO shared by all invocations served by this Lambda container"""
    return create_link_dao(load_config('redirect_link'), prefix=app_prefix())


@guarantee_500_response
def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Handle incoming API Gateway requests to redirect links

    This Lambda handler follows this procedure to redirect links:
    - Step 1: Extract code from request path
    - Step 2: Resolve the link (must exist, be valid and not expired)
    - Step 3: Check the password given in the query string
    - Step 4: Count the redirect
    - Step 5: Redirect client to the original URL

    HTTP responses:
        302: Successful redirect
            headers:
                Location: original URL
        400: Bad client request
            message: missing code in path parameters
        403: Forbidden
            message: link is password protected and the password doesn't match
        404: Not found
            message: link doesn't exist, was invalidated or expired
        500: Internal server error

    Example:
        >>> event = {'pathParameters': {'code': 'aBsJu'}, 'queryStringParameters': {'password': '12345'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        302
    """
    # 1- Extract code from request's path
    code = (event.get('pathParameters') or {}).get('code')
    if code is None:
        logger.info('Missing "code" in path. Responding with 400.', extra={'event': MISSING_CODE})
        return response_400(message="missing 'code' in path", error_code=MISSING_CODE)

    registry = LinkRegistry(link_dao(), base_url=base_url(event))

    # 2- Resolve link
    try:
        link = registry.resolve(code)
    except LinkNotFoundError as e:
        logger.info('Link not found, invalid or expired. Responding with 404.', extra={'code': code, 'event': LINK_NOT_FOUND})
        return response_404(message=str(e), error_code=LINK_NOT_FOUND)

    # 3- Check password
    password = (event.get('queryStringParameters') or {}).get('password')
    try:
        check_password(link, password)
    except LinkForbiddenError:
        logger.info('Password mismatch. Responding with 403.', extra={'code': code, 'event': LINK_FORBIDDEN})
        return response_403(error_code=LINK_FORBIDDEN)

    # 4- Count the redirect (authorized redirects only)
    try:
        link = registry.increment_redirect_count(link)
    except LinkNotFoundError as e:
        logger.info('Link vanished before counting the redirect. Responding with 404.', extra={'code': code, 'event': LINK_NOT_FOUND})
        return response_404(message=str(e), error_code=LINK_NOT_FOUND)

    # 5- Redirect client to original URL
    logger.info(
        'Redirecting client to original URL. Responding with 302.',
        extra={'code': code, 'event': REDIRECT_SUCCESS, 'redirect_count': link.redirect_count},
    )
    return response_302(location=link.original_url)
