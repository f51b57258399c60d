from linktracker.utils.config import app_env, app_name, app_prefix, load_config
from linktracker.utils.helpers import base_url, masked_link, as_utc, require_environment, guarantee_500_response
from linktracker.utils.shortener import generate_code
from linktracker.utils.logging import initialize_logging


__all__ = [
    'generate_code',
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'base_url',
    'masked_link',
    'as_utc',
    'require_environment',
    'guarantee_500_response',
    'initialize_logging',
]
