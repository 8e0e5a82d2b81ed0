"""
Invite codes for joining teams and tournaments.
"""
import secrets
import string

TEAM_CODE_LENGTH = 8
TOURNAMENT_CODE_LENGTH = 10
CODE_ALPHABET = string.ascii_uppercase + string.digits


def normalize_invite_code(code) -> str:
    """Uppercase and strip a user-entered code so lookups are case-insensitive."""
    if not isinstance(code, str):
        return ''
    return code.strip().upper()


def generate_invite_code(length: int, existing=()) -> str:
    """Return a random code of ``length`` characters not present in ``existing``."""
    taken = {normalize_invite_code(c) for c in existing}
    while True:
        code = ''.join(secrets.choice(CODE_ALPHABET) for _ in range(length))
        if code not in taken:
            return code
