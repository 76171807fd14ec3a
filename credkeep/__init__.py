"""credkeep: password strength, generation and credential import."""

from .generator import generate, GenerationPolicy
from .importer import parse_credentials, detect_format, detect_format_from_filename
from .records import make_credential, normalize_strength
from .strength import estimate_strength, strength_percent

__version__ = "0.1.0"
