"""
Helper Functions

Contains utility functions used throughout the application.
"""

from typing import Dict, Optional
from flask import request

# Number keys "1".."6" select option index 0..5
KEY_TO_OPTION_INDEX = {str(n): n - 1 for n in range(1, 7)}


def get_user_identity(request_obj=None) -> Dict[str, str]:
    """Extract user identity information from request."""
    if request_obj is None:
        request_obj = request

    user_ip = getattr(request_obj, 'remote_addr', None) or 'unknown'

    return {
        'user_ip': user_ip,
        'session_id': None,
        'username': None
    }


def key_to_option_index(key) -> Optional[int]:
    """Map a pressed key to an option index, or None for unmapped keys."""
    if key is None:
        return None
    return KEY_TO_OPTION_INDEX.get(str(key).strip())
