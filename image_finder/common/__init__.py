# Common utilities
from .config_loader import (
    load_alternate_tables,
    load_config,
    load_page_layouts,
    load_settings,
    load_watch_config,
)
from .log_config import setup_logging
from .text_utils import fold_name, normalize_sku
