import logging
import functools
from typing import Any

from linktracker.dao.base import LinkBaseDAO
from linktracker.dao.factory import create_link_dao
from linktracker.registry import LinkRegistry
from linktracker.utils import load_config, app_prefix, base_url
from linktracker.utils.helpers import guarantee_500_response
from linktracker.lambdas.responses import response_200, response_400
from linktracker.utils.constants import MISSING_CODE, LINK_INVALIDATED


logger = logging.getLogger(__name__)


@functools.cache
def link_dao() -> LinkBaseDAO:
    """Link DAO shared by all invocations served by this Lambda container"""
    return create_link_dao(load_config('invalidate_link'), prefix=app_prefix())


@guarantee_500_response
def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Handle incoming API Gateway requests to invalidate links

    Invalidation is idempotent: unknown and already invalid codes also get a 200.

    HTTP responses:
        200: link invalidated
        400: missing code in path parameters
        500: Internal server error
    """
    code = (event.get('pathParameters') or {}).get('code')
    if code is None:
        logger.info('Missing "code" in path. Responding with 400.', extra={'event': MISSING_CODE})
        return response_400(message="missing 'code' in path", error_code=MISSING_CODE)

    LinkRegistry(link_dao(), base_url=base_url(event)).invalidate(code)

    logger.info('Link invalidated. Responding with 200.', extra={'code': code, 'event': LINK_INVALIDATED})
    return response_200({'message': f"Link '{code}' invalidated", 'code': code})
