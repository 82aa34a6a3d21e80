"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Maximum accepted Euclidean distance between live and enrolled descriptors.
# Lower = stricter.
DEFAULT_MATCH_THRESHOLD = 0.6
DEFAULT_ADMIN_LIST_LIMIT = 200
MAX_ENROLLED_DESCRIPTORS = 3
