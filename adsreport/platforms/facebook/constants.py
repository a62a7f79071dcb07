"""Facebook Ads Platform Constants.

This module defines constants specific to the Facebook Graph API.

Constants:
- API_VERSION: Facebook Graph API version
- GRAPH_BASE_URL: Graph API host
- ACCOUNT_PREFIX: Prefix of ad account ids
- OAUTH_ERROR_CODE: Graph error code for invalid/expired tokens
"""

# Facebook Graph API Version
API_VERSION = "v18.0"

GRAPH_BASE_URL = "https://graph.facebook.com"

# Ad account ids are addressed as "act_<numeric id>"
ACCOUNT_PREFIX = "act_"

# Graph error code 190 == invalid or expired OAuth access token
OAUTH_ERROR_CODE = 190

# Endpoint paths (relative to the versioned Graph root)
ME_PATH = "me"
AD_ACCOUNTS_PATH = "me/adaccounts"
CAMPAIGNS_EDGE = "campaigns"
ADSETS_EDGE = "adsets"
INSIGHTS_EDGE = "insights"
PERMISSIONS_EDGE = "permissions"

# Daily rows: one insight per entity per day
TIME_INCREMENT_DAILY = 1

PERMISSION_GRANTED = "granted"

PROFILE_PICTURE_URL = "https://graph.facebook.com/{user_id}/picture?type=large"
