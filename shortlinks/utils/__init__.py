from shortlinks.utils.config import ShortenerConfig, app_env, app_name, app_prefix, load_config
from shortlinks.utils.helpers import get_short_url, link_id_from_event, form_fields, guarantee_500_response
from shortlinks.utils.shortener import generate_link_id, normalize_url
from shortlinks.utils.logging import NullLogger, ShortenerLogger, initialize_logging


__all__ = [
    'generate_link_id',
    'normalize_url',
    'ShortenerConfig',
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'get_short_url',
    'link_id_from_event',
    'form_fields',
    'guarantee_500_response',
    'NullLogger',
    'ShortenerLogger',
    'initialize_logging',
]
