"""
Human readable sequential codes: beat codes, employee ids, admin staff ids.

    BEAT-{location initials}-001   scoped to one location, 3 digits
    {role prefix}00001             scoped to the role prefix, 5 digits
    ADM-00001                      scoped to all admins, 5 digits

The next number is recomputed on every call by scanning the existing codes
(max + 1); there is no stored counter. Two concurrent callers scanning the
same partition can compute the same candidate. The candidate is checked once
more against the whole table and, on collision, suffixed with the last four
digits of the current millisecond timestamp. That check narrows the window
but does not close it; the unique constraints on every generated code column
turn whatever slips through into an IntegrityError instead of a duplicate.
"""
import logging
import re
import time

from users.models import CustomUser
from .models import AdminProfile, Beat

logger = logging.getLogger(__name__)

EMPLOYEE_ID_PREFIXES = {
    'SUPERVISOR': 'SUP',
    'HR': 'HR',
    'SECRETARY': 'SEC',
    'GENERAL_SUPERVISOR': 'GSUP',
    'GUARD': 'GRD',
}

BEAT_CODE_WIDTH = 3
EMPLOYEE_ID_WIDTH = 5
STAFF_ID_BASE = 'ADM-'
STAFF_ID_WIDTH = 5


def initials_prefix(name, length=3):
    """First letter of each word, upper-cased and cut to ``length``. Not padded."""
    return ''.join(word[0] for word in name.split(' ') if word).upper()[:length]


def beat_code_base(location_name):
    return f"BEAT-{initials_prefix(location_name)}-"


def next_sequence_code(base, existing_codes, width):
    """
    Return ``base`` followed by the highest number found after ``base`` in
    ``existing_codes`` plus one, zero padded to ``width``.

    Codes that do not match ``^{base}(\\d+)$`` exactly (including ones that
    already carry a collision suffix) are ignored.
    """
    pattern = re.compile(rf"^{re.escape(base)}(\d+)$")
    max_number = 0
    for code in existing_codes:
        match = pattern.match(code or '')
        if match:
            max_number = max(max_number, int(match.group(1)))
    return f"{base}{str(max_number + 1).zfill(width)}"


def collision_suffix():
    return str(int(time.time() * 1000))[-4:]


def generate_code(queryset, field, base, width, partition=None):
    """
    Build the next code for ``field`` on the model behind ``queryset``.

    ``partition`` is a dict of lookups restricting which rows are scanned
    (for instance ``{'location': location}``); the collision check always
    runs against the full table.
    """
    scanned = queryset.filter(**partition) if partition else queryset
    existing_codes = scanned.filter(**{f"{field}__startswith": base}).values_list(field, flat=True)
    code = next_sequence_code(base, existing_codes, width)

    if queryset.model._default_manager.filter(**{field: code}).exists():
        suffixed = f"{code}-{collision_suffix()}"
        logger.warning(f"{queryset.model.__name__}.{field} {code} already taken, using {suffixed}")
        return suffixed
    return code


def generate_beat_code(location):
    return generate_code(
        Beat.objects.all(), 'beat_code', beat_code_base(location.location_name), BEAT_CODE_WIDTH,
        partition={'location': location},
    )


def generate_employee_id(registration_role):
    prefix = EMPLOYEE_ID_PREFIXES[registration_role]
    return generate_code(CustomUser.objects.all(), 'employee_id', prefix, EMPLOYEE_ID_WIDTH)


def generate_staff_id():
    return generate_code(AdminProfile.objects.all(), 'staff_id', STAFF_ID_BASE, STAFF_ID_WIDTH)
