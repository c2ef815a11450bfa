"""Submission review configuration parameters."""

from os import environ
import warnings

LOGLEVEL = int(environ.get('LOGLEVEL', '20'))
"""
Logging verbosity.

See `https://docs.python.org/3/library/logging.html#levels`_.
"""

CORE_VERSION = "0.1.0"

# --- ROLES ---

STAFF_ROLE_ID = environ.get('STAFF_ROLE_ID', '')
"""Identifier of the community role whose members vote as staff."""

VETERANS_ROLE_ID = environ.get('VETERANS_ROLE_ID', '')
"""Identifier of the community role whose members vote as veterans."""

if not STAFF_ROLE_ID or not VETERANS_ROLE_ID:
    warnings.warn('STAFF_ROLE_ID or VETERANS_ROLE_ID is not set; nobody will'
                  ' be able to vote on submissions!')

# --- VOTING ---

STAFF_VOTING_THRESHOLD = int(environ.get('STAFF_VOTING_THRESHOLD', '2'))
"""Number of staff upvotes needed to accept a submission."""

VETERANS_VOTING_THRESHOLD = int(environ.get('VETERANS_VOTING_THRESHOLD', '3'))
"""Number of veteran upvotes needed to accept a submission."""

STAFF_REJECTION_THRESHOLD = int(
    environ.get('STAFF_REJECTION_THRESHOLD', str(STAFF_VOTING_THRESHOLD))
)
"""Number of staff downvotes needed to reject a submission."""

VETERANS_REJECTION_THRESHOLD = int(
    environ.get('VETERANS_REJECTION_THRESHOLD',
                str(VETERANS_VOTING_THRESHOLD))
)
"""Number of veteran downvotes needed to reject a submission."""

# --- STORE ---

STORE_LOAD_RETRIES = int(environ.get('STORE_LOAD_RETRIES', '3'))
"""Number of attempts to load a submission while the datastore is down."""

STORE_LOAD_RETRY_DELAY = float(environ.get('STORE_LOAD_RETRY_DELAY', '1'))
"""Seconds to wait between attempts to load a submission."""
