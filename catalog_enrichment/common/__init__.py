# Common utilities
from .config_loader import (
    load_config,
    load_pricing_rules,
    load_seo_settings,
    parse_pricing_rules,
)
from .log_config import setup_logging
from .settings import Settings, load_settings
from .text_utils import (
    clean_title,
    collapse_whitespace,
    html_to_paragraphs,
    html_to_text,
    parse_source_html,
    strip_media_markup,
    truncate_on_whitespace,
)
