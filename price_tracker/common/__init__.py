# Common utilities
from .config_loader import load_config, load_selectors
from .log_config import setup_logging
from .settings import Settings, load_settings
from .text_utils import clean_text, parse_percent, parse_price, round_half_up
