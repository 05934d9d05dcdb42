# store_api/core/logging/
# ├─ builder.py      # make_dict_config(settings) + setup_logging(settings)
# ├─ formatters.py   # JsonFormatter, ColorFormatter
# ├─ filters.py      # RequestIdFilter, RedactFilter (+ contextvar helpers)
# ├─ handlers.py     # handler config factories for dictConfig
# └─ middleware.py   # RequestIDMiddleware

from .builder import setup_logging, make_dict_config
from .filters import set_request_id, get_request_id, RequestIdFilter
from .middleware import RequestIDMiddleware

__all__ = ["setup_logging", "make_dict_config", "set_request_id", "get_request_id", "RequestIdFilter", "RequestIDMiddleware"]
