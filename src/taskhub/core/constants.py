"""Application-wide constants.

This module defines constants used throughout the application
to avoid magic numbers and ensure consistency.
"""

# String field lengths
MAX_EMAIL_LENGTH = 255
MAX_NAME_LENGTH = 255
MAX_SLUG_LENGTH = 63
MAX_TITLE_LENGTH = 200
MAX_DESCRIPTION_LENGTH = 2000
MAX_COMMENT_LENGTH = 1000

# Password requirements
MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 128
BCRYPT_ROUNDS = 12

# Token settings
ACCESS_TOKEN_JTI_LENGTH = 32

# Secret key requirements
MIN_SECRET_KEY_LENGTH = 32
DEFAULT_INSECURE_SECRET = "change-me-in-production"

# Tenant context
DEFAULT_ORGANIZATION_HEADER = "X-Organization-Id"
ORGANIZATION_PATH_PARAM = "org_id"
TEAM_PATH_PARAM = "team_id"

# Client-visible denial messages
MSG_AUTHENTICATION_REQUIRED = "Authentication required"
MSG_ACCESS_TOKEN_REQUIRED = "Access token required"
MSG_INSUFFICIENT_PERMISSIONS = "Insufficient permissions"
MSG_INSUFFICIENT_ORG_PERMISSIONS = "Insufficient organization permissions"
MSG_ORGANIZATION_CONTEXT_REQUIRED = "Organization context required"
MSG_TEAM_LEADER_REQUIRED = "Only team leaders can perform this action"
MSG_NOT_ORGANIZATION_MEMBER = "You are not a member of this organization"
MSG_INVALID_ORGANIZATION_ID = "Invalid organization identifier"
MSG_INVALID_TEAM_ID = "Invalid team identifier"
MSG_ORGANIZATION_MISMATCH = "Organization header does not match the requested organization"
