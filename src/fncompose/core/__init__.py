from .report import report, reporting
from .config import dotdict, to_dotdict, load_config, resolve_callable, make_composition, load_compositions
