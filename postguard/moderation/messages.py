"""User-facing notification messages and machine-readable codes."""

# Response messages
CONTENT_FLAGGED = "Content has been flagged for moderation"
CONTENT_SAFE = "Content appears to be safe for posting"
INVALID_REQUEST = "Invalid request format"
SERVER_ERROR = "Internal server error occurred"

# Detector findings
PROFANITY_DETECTED = "Profanity detected in content"
TOXICITY_DETECTED = "Toxic content detected"
PERSONAL_INFO_DETECTED = "Personal information detected"
SPAM_DETECTED = "Spam-like content detected"
NEGATIVE_SENTIMENT = "Content has negative sentiment"

# Recommendations
RECOMMEND_REVIEW = "Please review content before posting"
RECOMMEND_EDIT = "Consider editing content to remove flagged elements"
RECOMMEND_REPLACE = "Consider replacing flagged content"

# Platform limits
CHARACTER_LIMIT = "Content exceeds character limit"
HASHTAG_LIMIT = "Too many hashtags detected"
MENTION_LIMIT = "Too many mentions detected"

# Success
MODERATION_COMPLETE = "Content moderation completed successfully"
RULE_UPDATED = "Moderation rule updated successfully"
CONFIG_UPDATED = "Configuration updated successfully"

# Errors
MODERATION_FAILED = "Content moderation failed"
RULE_NOT_FOUND = "Moderation rule not found"
RULE_EXISTS = "A moderation rule with this id already exists"
CONFIG_INVALID = "Invalid configuration provided"
CONTENT_TOO_LONG = "Content is too long for analysis"
CONTENT_EMPTY = "Content cannot be empty"
INVALID_CONTENT_TYPE = "Invalid content type specified"
INVALID_PLATFORM = "Invalid platform specified"

HEALTH_CHECK = "Service health check completed"


class ErrorCode:
    """Machine-readable error codes returned by the API."""

    INVALID_REQUEST = "INVALID_REQUEST"
    CONTENT_TOO_LONG = "CONTENT_TOO_LONG"
    CONTENT_EMPTY = "CONTENT_EMPTY"
    INVALID_CONTENT_TYPE = "INVALID_CONTENT_TYPE"
    INVALID_PLATFORM = "INVALID_PLATFORM"
    MODERATION_FAILED = "MODERATION_FAILED"
    SERVER_ERROR = "SERVER_ERROR"
    RULE_NOT_FOUND = "RULE_NOT_FOUND"
    RULE_EXISTS = "RULE_EXISTS"
    CONFIG_INVALID = "CONFIG_INVALID"
    PATTERN_INVALID = "PATTERN_INVALID"


class SuccessCode:
    """Machine-readable success codes returned by the API."""

    MODERATION_COMPLETE = "MODERATION_COMPLETE"
    RULE_UPDATED = "RULE_UPDATED"
    CONFIG_UPDATED = "CONFIG_UPDATED"
