from shortlinks.utils.config import app_env, app_name, app_prefix, load_config
from shortlinks.utils.helpers import base_url, get_short_url, path_parameter, require_environment
from shortlinks.utils.shortener import (
    generate_shortcode,
    generate_random_shortcode,
    random_shortcode_generator,
    counter_shortcode_generator,
)
from shortlinks.utils.validators import validate_long_url, validate_shortcode
from shortlinks.utils.logging import initialize_logging


__all__ = [
    'generate_shortcode',
    'generate_random_shortcode',
    'random_shortcode_generator',
    'counter_shortcode_generator',
    'validate_long_url',
    'validate_shortcode',
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'base_url',
    'get_short_url',
    'path_parameter',
    'require_environment',
    'initialize_logging',
]
