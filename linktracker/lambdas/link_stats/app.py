import logging
import functools
from typing import Any

from linktracker.dao.base import LinkBaseDAO
from linktracker.dao.factory import create_link_dao
from linktracker.exceptions import LinkNotFoundError
from linktracker.registry import LinkRegistry
from linktracker.utils import load_config, app_prefix, base_url
from linktracker.utils.helpers import guarantee_500_response
from linktracker.lambdas.responses import response_200, response_400, response_404
from linktracker.utils.constants import MISSING_CODE, LINK_NOT_FOUND, STATS_RETRIEVED


logger = logging.getLogger(__name__)


@functools.cache
def link_dao() -> LinkBaseDAO:
    """Link DAO shared by all invocations served by this Lambda container"""
    return create_link_dao(load_config('link_stats'), prefix=app_prefix())


@guarantee_500_response
def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Handle incoming API Gateway requests for link statistics

    Stats are returned for invalidated and expired links too.

    HTTP responses:
        200: link JSON (see LinkModel.to_dict())
        400: missing code in path parameters
        404: code was never registered
        500: Internal server error
    """
    code = (event.get('pathParameters') or {}).get('code')
    if code is None:
        logger.info('Missing "code" in path. Responding with 400.', extra={'event': MISSING_CODE})
        return response_400(message="missing 'code' in path", error_code=MISSING_CODE)

    registry = LinkRegistry(link_dao(), base_url=base_url(event))
    try:
        link = registry.get_stats(code)
    except LinkNotFoundError as e:
        logger.info('Link not found. Responding with 404.', extra={'code': code, 'event': LINK_NOT_FOUND})
        return response_404(message=str(e), error_code=LINK_NOT_FOUND)

    logger.info('Link stats retrieved. Responding with 200.', extra={'code': code, 'event': STATS_RETRIEVED})
    return response_200(link.to_dict())
