from linkshortener.utils.config import app_env, app_name, app_prefix, load_config, link_settings, LinkSettings
from linkshortener.utils.helpers import base_url, get_short_url, require_environment, guarantee_500_response, request_header
from linkshortener.utils.shortener import CodeGenerator, generate_shortcode, is_valid_shortcode
from linkshortener.utils.validators import is_valid_url, parse_validity
from linkshortener.utils.timestamps import utcnow
from linkshortener.utils.logging import initialize_logging


__all__ = [
    'CodeGenerator',
    'generate_shortcode',
    'is_valid_shortcode',
    'is_valid_url',
    'parse_validity',
    'utcnow',
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'link_settings',
    'LinkSettings',
    'base_url',
    'get_short_url',
    'require_environment',
    'guarantee_500_response',
    'request_header',
    'initialize_logging',
]
