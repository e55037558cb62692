"""ignorematch Core - constants and validators shared by every layer.

Import specific names from submodules:
    from ignorematch.core.constants import Token, ErrorCode
    from ignorematch.core.validators import validate_config
"""

from ignorematch.core import constants, validators

__all__ = [
    "constants",
    "validators",
]
